"""Survey point editor for cadastral boundary surveys."""
