"""Command line interface for the cabinet configurator."""
