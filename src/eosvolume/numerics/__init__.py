"""Generic iteration drivers used by the volume solvers."""
