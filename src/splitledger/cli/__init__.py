"""Command-line interface for splitledger."""
