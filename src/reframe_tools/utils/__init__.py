"""Utilities: source acquisition, MIME sniffing, filenames, profiling."""
