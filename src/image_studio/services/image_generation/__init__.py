"""Image generation: model catalog, dimension resolution and the Replicate client."""
