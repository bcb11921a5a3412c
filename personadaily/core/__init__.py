"""Pure journal logic: aggregation, calendar indexing, export/import and levels."""
