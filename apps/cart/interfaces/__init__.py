# Cart interfaces layer
