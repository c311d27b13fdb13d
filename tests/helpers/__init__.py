"""Test helpers for Job Cloud."""
