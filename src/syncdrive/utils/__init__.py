"""Utility helpers for the sync drive orchestrator."""
