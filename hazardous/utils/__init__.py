"""Shared helpers for logging, exit codes and command error handling."""
