"""The policy deck: card definitions and the next-card selection rule."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass
from typing import Collection, Literal

from persona_politics.types import Decision, Difficulty

PolicyKind = Literal[
    "economic", "defense", "social", "diplomatic",
    "education", "security", "environment", "technology",
]

INITIAL_IDS: tuple[str, ...] = ("infrastructure", "military", "justice")


@dataclass(frozen=True)
class PolicyCard:
    id: str
    title: str
    description: str
    difficulty: Difficulty
    kind: PolicyKind
    next_on_approve: tuple[str, ...] = ()
    next_on_reject: tuple[str, ...] = ()

    def follow_ups(self, decision: Decision) -> tuple[str, ...]:
        return self.next_on_approve if decision == "approve" else self.next_on_reject


POLICY_POOL: tuple[PolicyCard, ...] = (
    PolicyCard(
        "infrastructure", "Infrastructure Deal",
        "A massive $2 trillion investment in roads, bridges, and public transit.",
        "hard", "economic",
        next_on_approve=("fuel_tax", "green_energy"),
        next_on_reject=("investor_withdrawal", "private_partnership"),
    ),
    PolicyCard(
        "military", "Military Spending",
        "Increase defense budget by 15% to modernize armed forces.",
        "hard", "defense",
        next_on_approve=("defense_contracts", "military_expansion"),
        next_on_reject=("peace_dividend", "nato_concerns"),
    ),
    PolicyCard(
        "justice", "Criminal Justice Reform",
        "Comprehensive reform including sentencing guidelines and police accountability.",
        "hard", "social",
        next_on_approve=("police_training", "prison_reform"),
        next_on_reject=("law_order", "police_union"),
    ),
    # Economy
    PolicyCard("fuel_tax", "Raise Fuel Tax",
               "Increase fuel tax by 10 cents to fund infrastructure maintenance.",
               "medium", "economic"),
    PolicyCard("green_energy", "Green Energy Initiative",
               "Massive investment in renewable energy infrastructure.", "hard", "economic"),
    PolicyCard("tax_reform", "Progressive Tax Reform",
               "Raise taxes on top earners to fund social programs.", "hard", "economic"),
    PolicyCard("stimulus", "Economic Stimulus Package",
               "Direct payments to citizens to boost domestic spending.", "medium", "economic"),
    PolicyCard("trade_deal", "Regional Trade Pact",
               "Sign comprehensive trade agreement with neighboring countries.",
               "medium", "economic"),
    PolicyCard("inflation_control", "Inflation Control Measures",
               "Implement price controls on essential goods to combat rising costs.",
               "hard", "economic"),
    PolicyCard("minimum_wage", "Raise Minimum Wage",
               "Increase minimum wage by 10% to boost worker income.", "medium", "economic"),
    # Defense
    PolicyCard("defense_contracts", "Defense Contractor Deal",
               "Award major contracts to domestic defense manufacturers.", "medium", "defense"),
    PolicyCard("military_expansion", "Overseas Base Expansion",
               "Establish new military bases in strategic locations.", "hard", "defense"),
    PolicyCard("conscription", "Mandatory Military Service",
               "Introduce 2-year conscription for all citizens aged 18-25.", "hard", "defense"),
    PolicyCard("arms_deal", "International Arms Sale",
               "Approve sale of advanced weapons to allied nations.", "medium", "defense"),
    PolicyCard("border_security", "Secure Borders Initiative",
               "Increase military funding to secure national borders.", "medium", "defense"),
    # Education
    PolicyCard("free_college", "Free College Tuition",
               "Make public universities tuition-free for all citizens.", "hard", "education"),
    PolicyCard("student_debt", "Student Debt Relief",
               "Cancel up to $50,000 in student loan debt per borrower.", "hard", "education"),
    PolicyCard("teacher_pay", "Increase Teacher Salaries",
               "Raise teacher pay by 20% to attract quality educators.", "medium", "education"),
    PolicyCard("curriculum_reform", "National Curriculum Standards",
               "Implement standardized curriculum across all public schools.",
               "medium", "education"),
    PolicyCard("research_grants", "University Research Funding",
               "Increase grants for scientific research at universities.", "medium", "education"),
    # Social
    PolicyCard("healthcare_reform", "Universal Healthcare",
               "Launch free healthcare for all citizens.", "hard", "social"),
    PolicyCard("police_training", "Police Training Reform",
               "Mandate de-escalation training and body cameras nationwide.", "medium", "social"),
    PolicyCard("prison_reform", "Prison System Overhaul",
               "Reduce sentences and improve rehabilitation programs.", "hard", "social"),
    PolicyCard("housing_subsidies", "Affordable Housing Program",
               "Subsidize housing for low-income families.", "medium", "social"),
    PolicyCard("gender_equality", "Gender Pay Equity Act",
               "Mandate equal pay for equal work across all industries.", "medium", "social"),
    PolicyCard("immigration_reform", "Immigration Policy Reform",
               "Create pathway to citizenship for undocumented immigrants.", "hard", "social"),
    # Security
    PolicyCard("surveillance", "Expand Surveillance Programs",
               "Increase government surveillance to combat terrorism.", "hard", "security"),
    PolicyCard("cyber_defense", "National Cyber Defense",
               "Invest in cybersecurity infrastructure to protect against attacks.",
               "medium", "security"),
    PolicyCard("counterterrorism", "Counterterrorism Funding",
               "Increase funding for intelligence and counterterrorism operations.",
               "medium", "security"),
    PolicyCard("privacy_protection", "Digital Privacy Act",
               "Strengthen privacy protections and limit data collection.", "medium", "security"),
    PolicyCard("policing_reform", "Community Policing Initiative",
               "Shift focus from enforcement to community engagement.", "medium", "security"),
    # International relations
    PolicyCard("nato_concerns", "NATO Commitment Review",
               "Allies express concern over reduced defense spending.", "hard", "diplomatic"),
    PolicyCard("sanctions", "Economic Sanctions",
               "Impose sanctions on nations violating human rights.", "medium", "diplomatic"),
    PolicyCard("alliance", "New Strategic Alliance",
               "Form military and economic alliance with regional powers.", "hard", "diplomatic"),
    PolicyCard("humanitarian_aid", "International Aid Package",
               "Provide humanitarian assistance to crisis-affected regions.",
               "medium", "diplomatic"),
    PolicyCard("treaty", "Climate Treaty Ratification",
               "Ratify international climate agreement with binding targets.",
               "hard", "diplomatic"),
    PolicyCard("peace_dividend", "Peace Dividend Program",
               "Redirect military spending to social programs.", "medium", "diplomatic"),
    # Environment
    PolicyCard("carbon_tax", "Carbon Tax on Industries",
               "Introduce carbon tax on heavy industries to reduce emissions.",
               "hard", "environment"),
    PolicyCard("renewable_power", "Renewable Energy Expansion",
               "Expand renewable power plants by 20% nationwide.", "medium", "environment"),
    PolicyCard("emission_limits", "Strict Emission Standards",
               "Implement aggressive emission limits for vehicles and factories.",
               "hard", "environment"),
    PolicyCard("green_tech", "Green Technology Incentives",
               "Provide tax breaks for companies developing clean technology.",
               "medium", "environment"),
    PolicyCard("conservation", "National Park Expansion",
               "Protect additional wilderness areas as national parks.", "medium", "environment"),
    # Technology
    PolicyCard("ai_regulation", "AI Weapons Ban",
               "Ban development of autonomous AI weapons systems.", "hard", "technology"),
    PolicyCard("startup_funding", "Tech Startup Grants",
               "Provide government funding for technology startups.", "medium", "technology"),
    PolicyCard("internet_censorship", "Internet Regulation Act",
               "Implement content moderation and censorship online.", "hard", "technology"),
    PolicyCard("innovation_hubs", "National Innovation Centers",
               "Build technology innovation hubs in major cities.", "medium", "technology"),
    PolicyCard("space_research", "Space Exploration Program",
               "Fund space research collaboration with international allies.",
               "hard", "technology"),
    PolicyCard("broadband", "Rural Broadband Expansion",
               "Bring high-speed internet to underserved rural areas.", "medium", "technology"),
    # Follow-ups to rejected opening cards
    PolicyCard("investor_withdrawal", "Foreign Investor Bailout",
               "Investors pull out, offering new bailout terms with strings attached.",
               "hard", "diplomatic"),
    PolicyCard("private_partnership", "Private-Public Partnership",
               "Allow private companies to build and operate infrastructure.",
               "medium", "economic"),
    PolicyCard("law_order", "Law and Order Campaign",
               "Increase police funding and toughen sentencing laws.", "medium", "security"),
    PolicyCard("police_union", "Police Union Negotiations",
               "Unions demand concessions after reform rejection.", "hard", "social"),
)

_BY_ID: dict[str, PolicyCard] = {card.id: card for card in POLICY_POOL}


def get_card(policy_id: str) -> PolicyCard | None:
    return _BY_ID.get(policy_id)


def policy_title(policy_id: str) -> str:
    """Display title for ``policy_id``; unknown ids fall back to the id itself."""
    card = _BY_ID.get(policy_id)
    return card.title if card is not None else policy_id


def initial_cards() -> list[PolicyCard]:
    return [_BY_ID[i] for i in INITIAL_IDS]


def next_card(
    current_id: str,
    decision: Decision,
    used_ids: Collection[str],
    rng: _random_mod.Random,
) -> PolicyCard | None:
    """Draw the card that follows ``current_id``.

    Unused follow-ups for the decision come first, then unused cards of the
    same kind, then any unused card. Returns None when the deck is spent or
    ``current_id`` is unknown.
    """
    current = _BY_ID.get(current_id)
    if current is None:
        return None
    used = set(used_ids)
    used.add(current_id)

    candidates = [_BY_ID[i] for i in current.follow_ups(decision) if i in _BY_ID and i not in used]
    if not candidates:
        candidates = [c for c in POLICY_POOL if c.kind == current.kind and c.id not in used]
    if not candidates:
        candidates = [c for c in POLICY_POOL if c.id not in used]
    if not candidates:
        return None
    return rng.choice(candidates)
