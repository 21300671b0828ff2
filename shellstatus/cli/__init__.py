"""Console entry points for shellstatus."""
