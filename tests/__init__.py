"""Test suite for the scaling_projects package."""
