"""
VN Framework module.

Provides the narrative layer built on top of the engine:
- Script (models, text format parser, loader, label index)
- Playback (navigation state, engine, commands, views, auto-play, session)
- Audio (navigation sounds and music switching)
"""
