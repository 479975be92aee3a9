"""Pipeline stages: detection, region preparation, text recognition."""
