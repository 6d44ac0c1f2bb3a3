"""Schema document handling, directives and the schema builder."""
