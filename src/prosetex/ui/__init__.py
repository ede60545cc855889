"""User interfaces built on top of the prosetex core."""
