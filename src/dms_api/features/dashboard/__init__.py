"""Per-caller dashboard counts and recent documents."""
