"""Per-platform prompt text, token budgets and name normalisation.

Every table falls back to the Technical entry (or a fixed default) for
platforms it does not list.
"""

from __future__ import annotations

from ..core.models import Platform
from ..errors import UnsupportedPlatformError

# ── Names ─────────────────────────────────────────────────────────────────

_ALIASES: dict[str, Platform] = {
    "x": Platform.TWITTER,
    "twitter/x": Platform.TWITTER,
    "notes": Platform.NOTE,
}

SUPPORTED_PLATFORMS = [p.value for p in Platform]


def normalize_platform(name: str | Platform) -> Platform:
    """Resolve a user-supplied platform name (case-insensitive, aliases)."""
    if isinstance(name, Platform):
        return name
    key = name.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Platform(key)
    except ValueError:
        raise UnsupportedPlatformError(name, SUPPORTED_PLATFORMS) from None


def _as_platform(platform: Platform | str) -> Platform | None:
    try:
        return Platform(platform)
    except ValueError:
        return None


# ── Token budgets ─────────────────────────────────────────────────────────

DEFAULT_MAX_TOKENS = 400

_MAX_TOKENS: dict[Platform, int] = {
    Platform.TWITTER: 150,
    Platform.LINKEDIN: 400,
    Platform.BLOG: 1000,
    Platform.TECHNICAL: 800,
    Platform.NOTE: 500,
}


def max_tokens_for(platform: Platform | str) -> int:
    """Maximum output tokens requested from the backend for *platform*."""
    return _MAX_TOKENS.get(_as_platform(platform), DEFAULT_MAX_TOKENS)


# ── System prompts ────────────────────────────────────────────────────────

_SYSTEM_PROMPTS: dict[Platform, str] = {
    Platform.BLOG: """You are an experienced technical writer and software engineering blogger. You excel at:
- Translating technical work into engaging narratives
- Highlighting the "why" behind code changes, not just the "what"
- Creating content that both developers and technical managers find valuable
- Using clear, accessible language while maintaining technical accuracy
- Structuring content for easy scanning and comprehension""",
    Platform.TWITTER: """You are a tech influencer who creates viral developer content on Twitter/X. You excel at:
- Condensing complex technical work into compelling 280-character stories
- Using relevant hashtags and emojis strategically
- Creating content that gets developers to engage and share
- Balancing technical accuracy with accessibility
- Highlighting achievements and learnings that resonate with the dev community""",
    Platform.LINKEDIN: """You are a senior software engineer who shares professional insights on LinkedIn. You excel at:
- Highlighting business impact of technical work
- Demonstrating professional growth and technical leadership
- Creating content that showcases both technical skills and business acumen
- Writing posts that attract recruiters and technical peers
- Balancing technical details with broader professional relevance""",
    Platform.TECHNICAL: """You are a senior technical lead creating documentation for other developers. You excel at:
- Providing clear, actionable technical insights
- Explaining architectural decisions and their rationale
- Highlighting implementation details that matter for future development
- Creating documentation that helps team members understand changes quickly
- Focusing on technical impact, performance implications, and maintainability""",
    Platform.NOTE: """You are a thoughtful developer creating personal development notes. You excel at:
- Organizing information for easy future reference
- Highlighting key learning points and decisions made
- Creating concise but complete summaries
- Noting important context and follow-up actions
- Structuring information for personal productivity and growth tracking""",
}


def system_prompt(platform: Platform | str) -> str:
    """Persona sent as the system instruction for *platform*."""
    return _SYSTEM_PROMPTS.get(_as_platform(platform), _SYSTEM_PROMPTS[Platform.TECHNICAL])


# ── Formatting instructions ───────────────────────────────────────────────

_INSTRUCTIONS: dict[Platform, str] = {
    Platform.BLOG: """
Create a blog post summary with this structure:

## What We Accomplished
- Lead with the main achievement or problem solved
- Use engaging, story-driven language

## Key Technical Highlights
- 2-3 most significant technical changes
- Focus on interesting implementation details
- Mention technologies/frameworks used

## Impact & Why It Matters
- Business value or user benefit
- Technical improvements (performance, maintainability, etc.)
- What this enables for future development

Use markdown formatting. Aim for 300-500 words. Make it engaging but informative.""",
    Platform.TWITTER: """
Create a Twitter/X thread or single post:
- Start with a hook that grabs attention
- Maximum 280 characters if single post, or 2-3 connected tweets
- Include 2-3 relevant hashtags (#coding #webdev #javascript etc.)
- Use 1-2 emojis strategically (🚀 ✨ 🔧 💡 🎯)
- Focus on the most impressive achievement or learning
- End with engagement (question, call to action, or relatable statement)

Examples:
"Just shipped user auth v2! 🚀 Reduced login time by 60% with smart caching and JWT optimization. Sometimes the smallest changes make the biggest impact 💡 #webdev #performance\"""",
    Platform.LINKEDIN: """
Create a professional LinkedIn post:
- Start with a professional hook about the business challenge or opportunity
- Highlight 2-3 key technical achievements and their business impact
- Mention specific technologies/skills used (great for keyword visibility)
- Include a learning or insight that adds professional value
- End with a question or call-to-action to encourage engagement
- Use professional tone but keep it conversational
- Aim for 150-300 words
- Consider using bullet points for readability

Structure: Challenge/Opportunity → Technical Solution → Business Impact → Personal Learning → Engagement Question""",
    Platform.TECHNICAL: """
Create comprehensive technical documentation:

## Summary
- Brief overview of what was accomplished

## Technical Changes
- List major code/architecture changes
- Include file/component names where relevant
- Mention new dependencies or libraries added

## Implementation Details
- Explain key technical decisions and their rationale
- Highlight any complex problem-solving approaches
- Note performance improvements or optimizations

## Breaking Changes & Migration Notes
- List any breaking changes
- Provide migration guidance if needed

## Testing & Quality
- Mention testing approach or coverage improvements
- Note any quality/security enhancements

## Next Steps
- List any follow-up work or technical debt created

Use clear, scannable formatting. Include code snippets or technical details where helpful.""",
    Platform.NOTE: """
Create organized personal notes:

## Summary
- What was accomplished in this work session

## Key Changes
- Most important modifications made
- Technologies/approaches used

## Decisions Made
- Important technical or architectural decisions
- Rationale behind choices made

## Learnings
- New things learned during implementation
- Challenges overcome and how

## Follow-up
- [ ] Tasks to complete later
- [ ] Technical debt created
- [ ] Ideas for future improvements

Use bullet points and checkboxes. Keep it concise but complete for future reference.""",
}


def platform_instructions(platform: Platform | str) -> str:
    """Formatting instructions appended to the prompt for *platform*."""
    return _INSTRUCTIONS.get(_as_platform(platform), _INSTRUCTIONS[Platform.TECHNICAL])


CODE_ANALYSIS_INSTRUCTIONS = (
    "\n\nCode Analysis Instructions:"
    "\n- Focus on the actual code changes and their impact"
    "\n- Identify new features, bug fixes, refactoring, or optimizations"
    "\n- Mention specific functions, classes, or modules when relevant"
    "\n- Highlight technical improvements or architectural changes"
    "\n- Consider the programming languages and technologies involved"
)
