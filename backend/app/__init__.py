"""SafeRoute backend."""
