"""Supporting libraries: configuration, display, notifications and snapshot sources."""
