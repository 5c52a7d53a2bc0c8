"""Policy-evaluation experiments and their configurations."""
