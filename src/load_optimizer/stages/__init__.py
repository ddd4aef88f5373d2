"""Session-volume adjustment stages, discovered by the StageRegistry."""
