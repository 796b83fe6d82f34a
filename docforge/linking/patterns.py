"""
Reference and URL patterns used by the link expander and resolver.

Matching Rules
--------------
WEB_URL_RE is John Gruber's liberal URL pattern
(https://gist.github.com/gruber/8891611), case-insensitive:

* Longest match wins: the body repeats greedily over non-space,
  non-bracket characters and balanced parentheses.
* The final character may not be whitespace, a bracket, a quote or
  common trailing punctuation (``` ` ! ( ) [ ] { } ; : ' " . , < > ? « » “ ” ‘ ’ ```),
  so "see http://x.org/a." stops before the full stop.
* Bare domains (no scheme) only match known TLDs and never when
  followed by ``@`` (e-mail addresses).

AUTOLINK_GUARD_RE is tested against the text *before* a URL match; a URL
directly preceded by ``{@link ``, ``@`` or an attribute quote (``='`` /
``="``) is already markup and is left alone.
"""

import re

_GENERIC_TLDS = (
    "com net org edu gov mil aero asia biz cat coop info int jobs mobi museum "
    "{name}post pro tel travel xxx"
)

_COUNTRY_TLDS = (
    "ac ad ae af ag ai al am an ao aq ar as at au aw ax az ba bb bd be bf bg bh "
    "bi bj bm bn bo br bs bt bv bw by bz ca cc cd cf cg ch ci ck cl cm cn co cr "
    "cs cu cv cx cy cz dd de dj dk dm do dz ec ee eg eh er es et eu fi fj fk fm "
    "fo fr ga gb gd ge gf gg gh gi gl gm gn gp gq gr gs gt gu gw gy hk hm hn hr "
    "ht hu id ie il im in io iq ir is it je jm jo jp ke kg kh ki km kn kp kr kw "
    "ky kz la lb lc li lk lr ls lt lu lv ly ma mc md me mg mh mk ml mm mn mo mp "
    "mq mr ms mt mu mv mw mx my mz na nc ne nf ng ni nl no np nr nu nz om pa pe "
    "pf pg ph pk pl pm pn pr ps pt pw py qa re ro rs ru rw sa sb sc sd se sg sh "
    "si sj Ja sk sl sm sn so sr ss st su sv sx sy sz tc td tf tg th tj tk tl tm "
    "tn to tp tr tt tv tw tz ua ug uk us uy uz va vc ve vg vi vn vu wf ws ye yt "
    "yu za zm zw"
)


def _tld_group(include_name: bool) -> str:
    generic = _GENERIC_TLDS.format(name="name " if include_name else "")
    return "(?:" + "|".join((generic + " " + _COUNTRY_TLDS).split()) + ")"


_BALANCED_PARENS = r"\([^\s()]*?\([^\s()]+\)[^\s()]*?\)|\([^\s]+?\)"
_URL_END_CHAR = r"""[^\s`!()\[\]{};:'".,<>?«»“”‘’]"""

WEB_URL_RE = re.compile(
    r"\b("
    # Scheme URL, or a domain followed by a slash
    r"(?:https?:(?:/{1,3}|[a-z0-9%])|[a-z0-9.\-]+[.]" + _tld_group(True) + r"/)"
    r"(?:[^\s()<>{}\[\]]+|" + _BALANCED_PARENS + r")+"
    r"(?:" + _BALANCED_PARENS + r"|" + _URL_END_CHAR + r")"
    r"|"
    # Bare domain, not part of an e-mail address
    r"(?:[a-z0-9]+(?:[.\-][a-z0-9]+)*[.]" + _tld_group(False) + r"\b/?(?!@))"
    r")",
    re.IGNORECASE,
)

# Text immediately before a URL that marks it as existing markup
AUTOLINK_GUARD_RE = re.compile(r"""(\{@link |@|=['"])$""")

# {@link .member} / {@link #member}
SHORTHAND_LINK_RE = re.compile(r"\{\s*@link\s+([#.])([\w$]+)\s*\}")

# Ticket identifiers: capital-letter prefix and digits (T123, BUG42)
TICKET_RE = re.compile(r"\b[A-Z]+\d+\b")

ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

# Inline tags and HTML tags whose contents are never autolinked again.
# Only real tags count, so "a < b" in prose is not a tag.
PROTECTED_SPAN_RE = re.compile(r"\{@[^{}]*\}|</?[A-Za-z][\w:-]*(?:\s[^<>]*)?/?>")

# {@link target}, {@link target text}, {@link target|text}, [text]{@link target},
# {@linkcode ...}, {@linkplain ...}, {@tutorial name}
INLINE_TAG_RE = re.compile(
    r"(?:\[([^\]]+)\])?\{@(link|linkcode|linkplain|tutorial)\s+([^{}]+?)\s*\}",
    re.IGNORECASE,
)

# Link targets that are URLs rather than long names ("module:foo" is a long name)
SCHEME_RE = re.compile(r"^(?:[a-z][\w+.\-]*://|mailto:)", re.IGNORECASE)
