"""Development task runner for the rend3 workspace."""
