"""Front ends hosting the diary session."""
