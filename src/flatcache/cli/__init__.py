"""flatcache command-line interface."""
