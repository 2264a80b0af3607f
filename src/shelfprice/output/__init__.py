"""Run artifact writers."""
