"""Field population engine: type policy, descriptors, coercion, accumulation."""
