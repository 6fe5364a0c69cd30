"""Configuration for servdesk."""
