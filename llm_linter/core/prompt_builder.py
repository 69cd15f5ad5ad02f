"""
Prompt construction for rule-based review of a single change unit.

The prompt is a fixed template: identical inputs always produce identical
text, so nothing time- or run-dependent may be embedded in it.
"""

from typing import Optional

from llm_linter.models.change_unit import ChangeUnit

PROMPT_TEMPLATE = """Below is one hunk of a Git patch.

{diff}

Check this patch for violations of the review rules listed at the end of this message.
- Examine only the patch above. Do not assume anything about code that is not shown.
- Report only violations of the rules below. Do not comment on anything the rules do not mention.
- Do not speculate. Every finding must be backed by lines that appear in the patch.

The number at the left edge of each line is its line number.
Lines starting with "+" were added and lines starting with "-" were removed; other lines are unchanged context.
Give the exact line numbers of the lines each finding refers to.

For every finding, reason through these steps before deciding its kind:
1. "quote": copy the excerpt of the patch the finding is about.
2. "rule": cite the specific rule clause the excerpt may violate.
3. "suspicion": explain why the excerpt looks like a violation.
4. "defense": give the strongest reason the excerpt might be acceptable.
5. "reevaluation": weigh the suspicion against the defense and state whether the finding holds.
6. "kind": make the final decision.
   - "error": the finding is valid in every case.
   - "warning": the finding may be valid depending on context.
   - "cancel": the re-evaluation showed the finding does not apply.

Review rules:

{rules}

Respond with a single JSON object and nothing else, following this schema:

{{
    "messages": {{
        "quote": string,
        "rule": string,
        "suspicion": string,
        "defense": string,
        "reevaluation": string,
        "message": string,
        "location": {{
            "start_line": number,
            "end_line": number
        }},
        "kind": "error" | "warning" | "cancel"
    }}[]
}}

Example:

{{
    "messages": [
        {{
            "quote": "let value = config.get(\\"key\\").unwrap();",
            "rule": "Do not use `unwrap` in production code",
            "suspicion": "unwrap panics when the key is missing.",
            "defense": "None; the file is production code.",
            "reevaluation": "unwrap is used in production code, so the finding is valid.",
            "message": "Handle the missing key instead of calling `unwrap`.",
            "location": {{ "start_line": 10, "end_line": 10 }},
            "kind": "error"
        }},
        {{
            "quote": "fn parse(input: &str) -> Value {{",
            "rule": "Public functions must have a doc comment",
            "suspicion": "No doc comment is visible above the function.",
            "defense": "The function is private, so the rule does not cover it.",
            "reevaluation": "The rule only applies to public functions, so the finding does not apply.",
            "message": "Add a doc comment to `parse`.",
            "location": {{ "start_line": 20, "end_line": 30 }},
            "kind": "cancel"
        }}
    ]
}}

If there are no violations, respond with {{"messages": []}}.
"""


def build_prompt(unit: ChangeUnit, rules_text: str) -> Optional[str]:
    """
    Build the review prompt for a change unit.
    
    Args:
        unit: Change unit to review
        rules_text: Rule text matched to the unit's path
        
    Returns:
        Prompt text, or None when no rule applies to the unit
    """
    if not rules_text.strip():
        return None
    
    return PROMPT_TEMPLATE.format(diff=unit.content_with_path(), rules=rules_text)
