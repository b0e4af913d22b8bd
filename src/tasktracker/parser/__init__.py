"""
Transcript-to-task parser.

Components:
- normalize.py: transcript normalization helpers
- model_extractor.py: prompted JSON extraction through an LLM
- rule_extractor.py: deterministic keyword/date fallback
- facade.py: TranscriptParser, picks a strategy and always returns a result
"""
