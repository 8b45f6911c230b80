"""navproto command-line interface."""
