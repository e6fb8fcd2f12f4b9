"""Infrastructure layer — session host, localization files, and runtime wiring."""
