"""Agents driving the Block Blast gymnasium environment."""
