"""Services: upstream client, availability normalization, marina directory."""
