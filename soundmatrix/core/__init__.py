"""Core engine for SoundMatrix.

Modules:
- easing: overshoot / elastic / bounce curves
- timeline: enter / hold / exit envelope per shape
- shapes: shape records and the capped live registry
- trigger: what one cell activation sets off
- frame: per-refresh driver
- palette: background cycle and foreground tables
- gestures: pointer / touch / key to cell triggers
- audio: tone synthesis and output stream
- engine: wires the pieces into one instrument
"""
