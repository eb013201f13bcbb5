"""fsguard command-line application."""
