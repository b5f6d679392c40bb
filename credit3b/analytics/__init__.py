"""In-process counters for extraction runs."""
