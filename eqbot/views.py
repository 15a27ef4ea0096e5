"""
View builders: each returns HTML text plus a button layout of
(label, callback payload) rows. The Telegram handlers turn these into
InlineKeyboardMarkup.
"""

import html
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from . import config
from .constants import ACHIEVEMENTS, EMOTIONS, BREATHING_STEPS, HISTORY_TEXT_PREVIEW, get_emotion
from .events import EventKind, encode_callback
from .schemas import Achievement, JournalEntry, UserRecord

ButtonRow = List[Tuple[str, str]]


@dataclass
class View:
    text: str
    buttons: List[ButtonRow] = field(default_factory=list)


BACK_ROW: ButtonRow = [("⬅️ Back", encode_callback(EventKind.BACK))]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def describe_emotions(names: Sequence[str], intensity: Optional[int] = None) -> str:
    parts = []
    for name in names:
        emotion = get_emotion(name)
        parts.append(emotion.label if emotion else name)
    described = ", ".join(parts)
    if intensity is not None and len(names) == 1:
        emotion = get_emotion(names[0])
        if emotion and intensity < len(emotion.intensity_levels):
            described += f" ({emotion.intensity_label(intensity)})"
    return described


def achievements_unlocked_text(unlocked: Iterable[Achievement]) -> str:
    lines = [f"🏆 <b>Achievement unlocked:</b> {a.icon} {a.title}" for a in unlocked]
    return "\n".join(lines)


# =============================================================================
# MENUS
# =============================================================================

def home_view(record: UserRecord) -> View:
    text = (
        "🧠 <b>Emotions in Check</b>\n\n"
        f"🔥 Streak: {_plural(record.streak, 'day')}\n"
        f"📓 Entries: {len(record.history)}\n\n"
        "How are you feeling right now?"
    )
    buttons = [
        [("💭 Log an emotion", encode_callback(EventKind.OPEN_EMOTIONS))],
        [("🎨 Several emotions", encode_callback(EventKind.OPEN_MULTI))],
        [("🌬️ Breathing exercise", encode_callback(EventKind.START_BREATHING))],
        [
            ("📜 History", encode_callback(EventKind.OPEN_HISTORY)),
            ("🏆 Achievements", encode_callback(EventKind.OPEN_ACHIEVEMENTS)),
        ],
    ]
    return View(text, buttons)


def emotion_menu_view() -> View:
    buttons = []
    row: ButtonRow = []
    for emotion in EMOTIONS:
        row.append((emotion.label, encode_callback(EventKind.CHOOSE_EMOTION, emotion.name)))
        if len(row) == 2:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)
    buttons.append(BACK_ROW)
    return View("💭 <b>Which emotion fits best?</b>", buttons)


def intensity_view(emotion_name: str) -> View:
    emotion = get_emotion(emotion_name)
    buttons = [
        [(level, encode_callback(EventKind.CHOOSE_INTENSITY, index))]
        for index, level in enumerate(emotion.intensity_levels)
    ]
    buttons.append(BACK_ROW)
    return View(f"{emotion.label}\n\n<b>How strong is it?</b>", buttons)


def multi_select_view(selected: Iterable[str]) -> View:
    selected = set(selected)
    buttons = []
    row: ButtonRow = []
    for emotion in EMOTIONS:
        mark = "✅ " if emotion.name in selected else ""
        row.append((f"{mark}{emotion.label}", encode_callback(EventKind.TOGGLE_EMOTION, emotion.name)))
        if len(row) == 2:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)
    buttons.append([(f"✔️ Continue ({len(selected)})", encode_callback(EventKind.CONFIRM_MULTI))])
    buttons.append(BACK_ROW)
    return View("🎨 <b>Select every emotion you feel</b>\n\nTap again to unselect.", buttons)


def journal_prompt_view(emotions: Sequence[str], intensity: Optional[int] = None) -> View:
    text = (
        f"You feel: {describe_emotions(emotions, intensity)}\n\n"
        "✍️ <b>Write a few words about it.</b>\n"
        "What happened? What do you notice?"
    )
    return View(text, [[("✖️ Cancel", encode_callback(EventKind.CANCEL))]])


def commit_view(record: UserRecord, entry: JournalEntry,
                unlocked: Sequence[Achievement]) -> View:
    lines = [
        "✅ <b>Entry saved.</b>",
        f"{describe_emotions(entry.emotions, entry.intensity)}",
        "",
        f"🔥 Streak: {_plural(record.streak, 'day')}",
    ]
    tips = []
    for name in entry.emotions:
        emotion = get_emotion(name)
        if emotion and emotion.tips:
            tips.append(f"{emotion.emoji} {random.choice(emotion.tips)}")
    if tips:
        lines += ["", "💡 <b>Tips:</b>"] + tips
    if unlocked:
        lines += ["", achievements_unlocked_text(unlocked)]
    return View("\n".join(lines), home_view(record).buttons)


# =============================================================================
# READ-ONLY VIEWS
# =============================================================================

def history_view(record: UserRecord, limit: Optional[int] = None) -> View:
    limit = limit or config.HISTORY_PAGE_SIZE
    if not record.history:
        return View("📜 <b>Your journal is empty.</b>\n\nLog an emotion to start.", [BACK_ROW])

    lines = [f"📜 <b>Last {min(limit, len(record.history))} of {len(record.history)} entries</b>", ""]
    for entry in reversed(record.history[-limit:]):
        preview = entry.text
        if len(preview) > HISTORY_TEXT_PREVIEW:
            preview = preview[:HISTORY_TEXT_PREVIEW] + "…"
        lines.append(f"<b>{entry.created_at:%Y-%m-%d %H:%M}</b> {describe_emotions(entry.emotions, entry.intensity)}")
        if preview:
            lines.append(f"<i>{html.escape(preview)}</i>")
        lines.append("")
    return View("\n".join(lines).rstrip(), [BACK_ROW])


def achievements_view(record: UserRecord) -> View:
    lines = [
        f"🏆 <b>Achievements</b> ({len(record.unlocked_achievements)}/{len(ACHIEVEMENTS)})",
        "",
    ]
    for achievement in ACHIEVEMENTS:
        icon = achievement.icon if record.has_achievement(achievement.name) else "🔒"
        lines.append(f"{icon} <b>{achievement.title}</b> - {achievement.description}")
    lines += ["", f"🌬️ Breathing exercises completed: {record.breathing_count}"]
    return View("\n".join(lines), [BACK_ROW])


# =============================================================================
# BREATHING
# =============================================================================

STOP_ROW: ButtonRow = [("⏹ Stop", encode_callback(EventKind.STOP_BREATHING))]


def breathing_intro_view(cycles: int) -> View:
    return View(
        "🌬️ <b>Box breathing</b>\n\n"
        f"Get comfortable. We'll do {_plural(cycles, 'cycle')} of four steps.",
        [STOP_ROW],
    )


def breathing_step_view(step_index: int, cycle_index: int, cycles: int) -> View:
    name, instruction = BREATHING_STEPS[step_index]
    return View(
        f"<b>{name}</b>\n{instruction}\n\ncycle {cycle_index + 1}/{cycles}",
        [STOP_ROW],
    )


def breathing_complete_view(record: UserRecord, unlocked: Sequence[Achievement]) -> View:
    lines = [
        "🧘 <b>Well done.</b> Notice how you feel now.",
        "",
        f"Breathing exercises completed: {record.breathing_count}",
    ]
    if unlocked:
        lines += ["", achievements_unlocked_text(unlocked)]
    return View("\n".join(lines), [[("✅ Done", encode_callback(EventKind.DONE_AND_DELETE))]])


def help_view(record: UserRecord) -> View:
    text = (
        "<b>❓ HELP</b>\n\n"
        "💭 <b>Log an emotion</b> - pick one emotion, its intensity, then write about it\n"
        "🎨 <b>Several emotions</b> - select a mix of emotions for one entry\n"
        "🌬️ <b>Breathing</b> - a guided 4-4-4-4 box breathing exercise\n"
        "📜 <b>History</b> - your latest entries\n"
        "🏆 <b>Achievements</b> - milestones you've reached\n\n"
        "Outside the journal you can simply chat with OWLai 🦉\n\n"
        "/start - main menu\n"
        "/clear - forget our conversation\n"
        "/help - this help"
    )
    return View(text, home_view(record).buttons)
