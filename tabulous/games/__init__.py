"""Built-in game descriptors."""
