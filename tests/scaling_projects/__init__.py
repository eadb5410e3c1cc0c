"""
Tests for the Scaling Projects normalization pipeline.

This package contains tests for:
- Chain registry
- Escrow token resolution
- Tracked transaction configs
- Project assembly and batch error policy
- JSON descriptor loading and the CLI
"""
