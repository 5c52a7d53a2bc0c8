"""Small decision processes with known failure probabilities."""
