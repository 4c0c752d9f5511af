"""Keyword lists and thresholds for the local heuristic extractor.

Everything the heuristic matches against lives in :class:`HeuristicConfig` so a
caller can tune it (``dataclasses.replace(DEFAULT_CONFIG, ...)``) without
touching the extraction code. Keywords are matched case-insensitively on word
boundaries; multi-word entries match as whole phrases.
"""

from __future__ import annotations

from dataclasses import dataclass

# (regex, label). A label of None means the pattern's ``owner`` group is the
# owner. Patterns are tried in order; the first acceptable match wins.
OWNER_PATTERNS: tuple[tuple[str, str | None], ...] = (
    # "Jan zal het rapport schrijven", "Sanne pakt dit op"
    (
        r"\b(?P<owner>[A-Z][a-zà-ÿ]+)\s+(?:zal|gaat|moet|neemt|pakt|regelt|doet|schrijft"
        r"|maakt|stuurt|belt|zorgt|checkt|plant|bereidt)\b",
        None,
    ),
    # Inverted word order: "Morgen zal Kees de notulen sturen"
    (
        r"\b(?:zal|gaat|moet|neemt|pakt|regelt|doet|schrijft|maakt|stuurt|belt|zorgt)"
        r"\s+(?P<owner>[A-Z][a-zà-ÿ]+)\b",
        None,
    ),
    # "actiepunt voor Piet", "wordt opgepakt door Fatima"
    (r"\b(?:voor|door|aan)\s+(?P<owner>[A-Z][a-zà-ÿ]+)\b", None),
    (
        r"(?i)\b(?P<owner>het team|de projectleider|de manager|de teamleider|de klant"
        r"|de voorzitter|de secretaris|marketing|sales|finance|development|het bestuur)\b",
        None,
    ),
    (r"(?i)\bik\b", "Spreker"),
    (r"(?i)\b(?:we|wij|ons|onze)\b", "Team"),
)

# Capitalised words that open sentences but are never people.
OWNER_STOPWORDS: tuple[str, ...] = (
    "we", "wij", "ik", "jij", "je", "jullie", "zij", "ze", "hij", "het", "dat", "dit",
    "er", "de", "een", "die", "dan", "daarna", "dus", "ook", "nu", "eerst", "hier",
    "daar", "wie", "wat", "welke", "misschien", "morgen", "vandaag", "overmorgen",
    "volgende", "deze", "iedereen", "niemand", "iemand", "maandag", "dinsdag",
    "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag", "verder", "graag",
    "straks", "binnenkort", "alles", "vervolgens", "tenslotte", "uiteindelijk", "alvast",
    "natuurlijk", "eigenlijk", "zeker", "samen", "nog", "even", "vanmiddag", "vanochtend",
    "vanavond", "gisteren", "toen", "waarschijnlijk", "hopelijk", "helaas",
    "allemaal", "ja", "nee", "oke", "oké", "goed", "prima",
)

# Scanned in order; the first phrase found becomes the due hint.
DEADLINE_PHRASES: tuple[str, ...] = (
    "vandaag",
    "vanmiddag",
    "morgen",
    "overmorgen",
    "deze week",
    "eind van de week",
    "volgende week",
    "maandag",
    "dinsdag",
    "woensdag",
    "donderdag",
    "vrijdag",
    "deze maand",
    "eind van de maand",
    "volgende maand",
    "dit kwartaal",
    "volgend kwartaal",
    "voor de deadline",
    "zo snel mogelijk",
    "asap",
)


@dataclass(frozen=True)
class HeuristicConfig:
    """Fixed configuration for keyword-based meeting extraction."""

    min_sentence_length: int = 12
    insight_min_length: int = 40
    insight_max_length: int = 200

    max_decisions: int = 5
    max_insights: int = 5
    max_blockers: int = 4
    max_next_steps: int = 5
    max_follow_ups: int = 4

    decision_type_threshold: int = 2
    planning_type_threshold: int = 3

    high_priority_keywords: tuple[str, ...] = (
        "moet", "moeten", "dringend", "urgent", "asap", "meteen", "direct",
        "zo snel mogelijk", "prioriteit", "cruciaal", "essentieel", "deadline",
    )
    medium_priority_keywords: tuple[str, ...] = (
        "zal", "zullen", "neemt", "pakt", "oppakken", "regelt", "regelen", "afronden",
        "opleveren", "schrijven", "voorbereiden", "sturen", "actiepunt", "taak",
        "zorgt", "zorgen voor",
    )
    low_priority_keywords: tuple[str, ...] = (
        "misschien", "eventueel", "zou kunnen", "als er tijd is", "wanneer mogelijk",
        "nice to have", "ooit", "op termijn",
    )
    decision_keywords: tuple[str, ...] = (
        "besloten", "besluiten", "besluit", "beslissing", "afgesproken", "afspraak",
        "akkoord", "gekozen", "kiezen voor", "we gaan voor", "goedgekeurd",
        "vastgesteld", "definitief", "overeengekomen",
    )
    problem_keywords: tuple[str, ...] = (
        "probleem", "problemen", "blokkade", "blocker", "geblokkeerd", "vertraging",
        "vertraagd", "risico", "knelpunt", "lukt niet", "werkt niet", "kapot", "bug",
        "fout", "tekort", "wachten op", "afhankelijk van",
    )
    next_step_keywords: tuple[str, ...] = (
        "daarna", "vervolgens", "volgende stap", "vervolgstap", "eerst", "tot slot",
        "als volgende", "na afloop", "next step",
    )
    follow_up_keywords: tuple[str, ...] = (
        "navragen", "nagaan", "uitzoeken", "terugkomen op", "opvolgen", "checken",
        "controleren", "afstemmen", "nabellen", "onduidelijk", "nog niet duidelijk",
    )
    brainstorm_keywords: tuple[str, ...] = (
        "idee", "ideeën", "brainstorm", "brainstormen", "wat als", "voorstel",
        "creatief", "mogelijkheden", "opties",
    )
    update_keywords: tuple[str, ...] = (
        "status", "update", "voortgang", "stand van zaken", "afgerond", "bijna klaar",
        "vorige week", "gisteren",
    )
    retrospective_keywords: tuple[str, ...] = (
        "retrospective", "retro", "terugblik", "terugblikken", "evaluatie", "evalueren",
        "wat ging goed", "wat kan beter", "lessons learned", "geleerd",
    )
    positive_keywords: tuple[str, ...] = (
        "goed", "mooi", "top", "prima", "fijn", "blij", "tevreden", "succes",
        "geweldig", "uitstekend", "gelukt", "positief", "sterk",
    )
    negative_keywords: tuple[str, ...] = (
        "slecht", "probleem", "problemen", "zorgen", "teleurgesteld", "jammer",
        "lastig", "moeilijk", "mislukt", "frustrerend", "negatief", "kritiek",
    )

    owner_patterns: tuple[tuple[str, str | None], ...] = OWNER_PATTERNS
    owner_stopwords: tuple[str, ...] = OWNER_STOPWORDS
    deadline_phrases: tuple[str, ...] = DEADLINE_PHRASES


DEFAULT_CONFIG = HeuristicConfig()
