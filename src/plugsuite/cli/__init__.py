"""plugsuite command line interface."""
