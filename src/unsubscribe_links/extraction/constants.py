"""
Constants and shared configuration for unsubscribe link extraction.

This module contains the locale keyword table, the shared regex patterns
and the string constants used across the extraction pipeline.
"""

import re
from typing import List, Pattern, Tuple

# Locale keyword table: (locale, pattern source). Order is significant,
# each pattern that matches a candidate contributes one body link.
KEYWORD_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ('en', r'unsubscribe'),
    ('en', r'opt[ -]?out'),
    ('en', r'preferences'),
    ('en', r'subscription'),
    ('en', r'notification settings'),
    ('da', r'(afmeld|frameld)'),
    ('es', r'(darse de baja|darte de baja|dar de baja|cancelar (la |tu )?suscripci[oó]n)'),
    ('fr', r'(d[ée]sinscri|d[ée]sabonn)'),
    ('ru', r'(отписаться|отписки|отказаться от рассылки)'),
    ('sr', r'(odjavi|odjava|одјави|одјава)'),
    ('is', r'afskr[áa]'),
    ('he', r'(הסרה|להסרה|הסר)'),
    ('ht', r'dezab[oò]ne'),
    ('zh', r'退订'),
    ('zh', r'取消订阅'),
    ('ar', r'إلغاء الاشتراك'),
    ('hy', r'(ապաբաժանորդագր|բաժանորդագրությունից հրաժարվել)'),
    ('de', r'(abmelden|abbestellen)'),
    ('de', r'(austragen|newsletter-abmeldung)'),
)

KEYWORD_REGEXES: Tuple[Tuple[str, Pattern], ...] = tuple(
    (locale, re.compile(source, re.IGNORECASE))
    for locale, source in KEYWORD_PATTERNS
)

# Header and classification patterns
LIST_UNSUBSCRIBE_HEADER = 'list-unsubscribe'

MAILTO_PATTERN: Pattern = re.compile(r'^mailto:([^?]*)', re.IGNORECASE)

FORWARDED_SUBJECT_PATTERN: Pattern = re.compile(r'^\s*fwd?:', re.IGNORECASE)

# A run of characters ending in one or more terminators plus optional whitespace
SENTENCE_TERMINATOR_PATTERN: Pattern = re.compile(r'[^.!?]*[.!?]\s*')
SENTENCE_SEGMENT_PATTERN: Pattern = re.compile(r'[^.!?]*[.!?]+\s*|[^.!?]+')

# Legacy anchor placeholder meaning "no real target"
BLANK_HREF = 'blank'

# Action types
ACTION_EMAIL = "email"
ACTION_BROWSER = "browser"

# Extraction conditions
CONDITION_LOADING = "loading"
CONDITION_DONE = "done"
CONDITION_DISABLED = "disabled"
CONDITION_ERRORED = "errored"

TERMINAL_CONDITIONS: List[str] = [
    CONDITION_DONE, CONDITION_DISABLED, CONDITION_ERRORED
]

# Blacklist purposes (keys of the rule file)
BLACKLIST_EMAILS = "emails"
BLACKLIST_BROWSER = "browser"

# Confirmation prompts
CONFIRM_TEXT_DEFAULT = "Are you sure you want to unsubscribe?"
CONFIRM_TEXT_EMAIL = (
    "Are you sure you want to unsubscribe? "
    "An unsubscribe email will be sent on your behalf."
)
CONFIRM_TEXT_FORWARDED = (
    "This email looks like it was forwarded to you. Unsubscribing may "
    "remove the original recipient, not you, from the mailing list. "
    "Are you sure you want to unsubscribe?"
)

# Sent-mail category tags (lower-cased)
DEFAULT_SENT_CATEGORIES: Tuple[str, ...] = (
    'sent', 'sent mail', 'sent items', '[gmail]/sent mail'
)
