"""Small helpers shared by providers: paths, media detection, durations."""
