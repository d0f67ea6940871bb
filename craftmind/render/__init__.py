"""Console and terminal rendering for diaries."""
