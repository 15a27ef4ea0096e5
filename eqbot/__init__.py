"""
Emotions in Check - a Telegram emotion journal with streaks, achievements,
guided breathing and the OWLai assistant, plus the OwlAI quick-reply relay.

Structure:
├── handlers/          # Telegram command, message, button handlers
├── services/          # Session state machine, journal, breathing, stores, assistant
├── schemas/           # Pydantic records and catalog dataclasses
├── ai/                # Generative-text providers
├── views.py           # Text + button layouts for every screen
├── events.py          # Callback payload decoding
├── core.py            # Emotions in Check bot wiring
└── owl_bot.py         # OwlAI relay bot
"""

__version__ = "0.1.0"
