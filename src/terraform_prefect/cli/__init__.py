"""Command line interface for driving the provider's adapters directly."""
