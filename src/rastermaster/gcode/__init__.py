"""Motion command vocabulary and G-code output."""
