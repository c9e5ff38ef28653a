"""Sea-Style marina availability: fetch, normalize and serve boat reservation availability."""
