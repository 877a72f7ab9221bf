"""Script planning service for presentation decks.

This service handles:
- Splitting uploaded deck text into per-slide units
- Drafting a goal, talk track and key points for every slide
- Distributing a presentation time budget across slides
- Exporting the finished speaking script
"""

__version__ = "1.0.0"
