"""Press secretary one-liners keyed by the size and sign of a stat swing."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass
from typing import Literal

RemarkTone = Literal["surprised", "proud", "neutral", "concerned", "roast"]

BIG_SWING = 6


@dataclass(frozen=True)
class RemarkOption:
    tone: RemarkTone
    lines: tuple[str, ...]


@dataclass(frozen=True)
class Remark:
    text: str
    tone: RemarkTone


@dataclass(frozen=True)
class SecretaryRemark:
    id: str
    text: str
    tone: RemarkTone
    time: int


SECRETARY_REMARKS: dict[str, tuple[RemarkOption, ...]] = {
    "positive": (
        RemarkOption("surprised", (
            "I... didn't expect that to work. Nicely played.",
            "Well, that's a pleasant surprise. Color me impressed.",
            "Against all odds, you pulled it off. Remarkable.",
            "I stand corrected. That was actually brilliant.",
            "Astonishing. Did you actually read the briefing this time?",
            "Well, well. Perhaps there's hope for this administration yet.",
        )),
        RemarkOption("proud", (
            "Approval up, power up. Schedule the victory lap?",
            "Now that's leadership. The people are listening.",
            "Textbook execution. I'll update your legacy file.",
            "Masterful. Your opponents are taking notes.",
            "Finally, a decision worthy of the office.",
            "Brilliant, sir. Almost makes up for last week.",
        )),
    ),
    "small_positive": (
        RemarkOption("neutral", (
            "A step forward. Try not to trip on the next one.",
            "Progress, albeit modest. We'll take it.",
            "Small wins add up. Eventually.",
            "Not bad. Not great. But not bad.",
            "Baby steps, Mr. President. Baby steps.",
            "Well, it's not a disaster. That's something.",
        )),
    ),
    "negative": (
        RemarkOption("roast", (
            "Brave strategy: disappoint everyone equally.",
            "Well, at least you're consistent... at failing.",
            "I've seen better decisions from a magic 8-ball.",
            "Bold move. Historically terrible, but bold.",
            "The history books will have questions.",
            "Mr. President, that's one way to tank the economy in record time.",
            "Diplomacy is about balance, not bulldozing, sir.",
            "Your approval rating is dropping faster than our stock market.",
            "Congratulations. You've united the opposition against you.",
            "I'll prepare the apology tour itinerary.",
        )),
        RemarkOption("concerned", (
            "Sir, the markets are practicing fainting.",
            "We may need to update the crisis protocols.",
            "I'll prepare the damage control briefing.",
            "This is... concerning. Very concerning.",
            "The cabinet is requesting an emergency meeting.",
            "Perhaps we should reconsider our approach, sir.",
        )),
    ),
    "small_negative": (
        RemarkOption("neutral", (
            "Paper cuts still bleed, sir.",
            "A minor setback. Emphasis on minor.",
            "Could be worse. Could also be better.",
            "Not ideal, but we've survived worse.",
            "A stumble, not a fall. Yet.",
            "The opposition is taking notes. Unflattering ones.",
        )),
    ),
}


def remark_category(delta_total: int) -> str:
    if delta_total >= BIG_SWING:
        return "positive"
    if delta_total > 0:
        return "small_positive"
    if delta_total <= -BIG_SWING:
        return "negative"
    return "small_negative"


def pick_secretary_remark(delta_total: int, rng: _random_mod.Random) -> Remark:
    option = rng.choice(SECRETARY_REMARKS[remark_category(delta_total)])
    return Remark(text=rng.choice(option.lines), tone=option.tone)
