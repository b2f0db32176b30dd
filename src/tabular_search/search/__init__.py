"""
Row search and ranking package.

This package provides a pure-Python lexical ranking stack:
- analyzers: Script-aware tokenization with synonym and prefix expansion
- synonyms: Static synonym groups
- vectorizer: TF-IDF fitting over a per-query document batch
- fuzzy: Levenshtein edit distance
- similarity: Cosine similarity and fuzzy match scoring
- query_parser: Field-scoped boolean query parsing and evaluation
- fields: Case-insensitive field resolution and weighted documents
- highlight: Query term highlighting
- engine: Ranking pipeline
"""
