"""Serial controller for TVs using the fixed-width ASCII control protocol."""
