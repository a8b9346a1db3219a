"""
Water sort core Python package.

This package holds the puzzle state machine and the pure-logic helpers
used by the terminal and web hosts.
Modules:
- constants.py: board dimensions, frame rate, sound identifiers
- color.py: Color
- tube.py: Tube helpers and text rendering
- state.py: Playing, Transfering, Select
- deal.py: seeded board dealing
- moves.py: pour rules and win predicate
- engine.py: PuzzleEngine
- layout.py: screen geometry for renderers and hit testing
- snapshot.py: JSON view of an engine
"""
