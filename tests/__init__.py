"""Tests for the Garage Gate integration."""
