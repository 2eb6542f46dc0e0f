"""
Fuzzy matching and record storage.

- bitap: approximate substring matching with positional decay
- matcher: per-field scoring, weighted aggregation and ranking
- weights: field weight schemes
- store: the ordered in-memory record store
- codec: the NUL/newline wire format
"""
