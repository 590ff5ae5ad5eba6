from post_enhancer.api.schemas import GenerateRequest

PROMPT_TEMPLATE = """
You are an expert LinkedIn post generator. Your SOLE task is to generate the text for a single LinkedIn post based on the provided details.

---
CRITICAL RULES:
1.  **NO PREAMBLE:** Do NOT include any introductory text, conversational phrases, or explanations like "Here is your post." Your response MUST start directly with the first word of the LinkedIn post itself.
2.  **NO MARKDOWN:** Do NOT use any Markdown formatting. This includes asterisks for bolding (**text**), underscores for italics (_text_), horizontal rules (--- or ***), or hashtags for headers (# Header). The post must be plain text.
3.  **ALLOWED FORMATTING:** You MAY use standard Unicode emojis (like 📈, ✅, 👉) and line breaks to structure the post for maximum readability on LinkedIn.
---

**CORE INFORMATION:**
- **Company/Project Context:** "{context}"
- **Specific Idea to Convey:** "{idea}"

**POST REQUIREMENTS:**
- **Target Audience:** {audience}. Tailor the language and value propositions to this group.
- **Tone of Voice:** {tone}.
- **Structure:** Use short paragraphs (2-3 sentences max). Use lists where appropriate for clarity.
- **Call to Action (CTA):** End the post with a clear, engaging question to encourage comments.
- **Hashtags:** Include 3-5 relevant and specific hashtags at the end.
---

Generate the LinkedIn post now.
"""


def build_prompt(request: GenerateRequest) -> str:
    """Render the post-generation prompt.

    Pure function of the request fields. ``cta`` is accepted but the CTA rule in
    the template is fixed.
    """
    # str.format does not re-scan substituted values, so braces in user input are safe.
    return PROMPT_TEMPLATE.format(
        context=request.context,
        idea=request.idea,
        audience=request.audience,
        tone=request.tone,
    )
