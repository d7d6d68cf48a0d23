"""annotext command line interface."""
