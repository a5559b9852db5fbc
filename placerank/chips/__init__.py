"""
Attribute chips shown on result cards.

Responsibilities:
- Derive short labels ("pet friendly", "terraza") only from literal review
  text, gated on how much independent evidence the reviews provide.
- Turn structured question/answer data into food type, noise and
  reservation chips.
"""
