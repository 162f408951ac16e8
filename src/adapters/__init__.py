"""Adaptadores: subprocess, terminales y prompts interactivos."""
