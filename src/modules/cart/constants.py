"""Cart constants."""

# Upper bound for a single line, whether set directly or reached by merging.
MAX_LINE_QUANTITY = 9999
