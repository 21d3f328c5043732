"""Library scanning and checking for shelfscan."""
