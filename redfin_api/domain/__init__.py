"""Domain definitions independent of HTTP and storage wiring."""
