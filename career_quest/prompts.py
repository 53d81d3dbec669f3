"""Handlebars instruction templates for the three request kinds.

Each content API call carries the user's raw text as the question and one of
these templates as the instructions. The templates are fixed apart from the
counselor's name, which comes from settings.
"""

from collections.abc import Callable
from typing import Any

import pybars

from career_quest.errors import GenerationError
from career_quest.stages import StageKind

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class PromptError(GenerationError):
    """Raised when a Handlebars template fails to compile or render."""


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context))
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


PATHS_TEMPLATE = (
    "You are a career counselor AI named {{{counselor}}} and your job is to turn "
    "career counseling into an immersive adventure. You run a career simulation "
    "tool that lets users explore what-if career paths in alternate realities. "
    "When a user shares their interests, strengths and goals, respond with "
    "several what-if career paths tailored to them. "
    "Respond only with JSON. The top-level object must contain career_paths, an "
    "array of career paths. Each career path has exactly three keys: "
    "what_if, a string starting with \"What if you...\" that introduces the path; "
    "narrative, an engaging story-like explanation of the career and the steps "
    "to pursue it; and image_description, a vivid description of an image that "
    "represents the path, including the workplace, tools or environment. "
    "Keep it concise and engaging."
)

DETAIL_TEMPLATE = (
    "You are {{{counselor}}}, a career counselor AI who turns career counseling "
    "into an immersive adventure. When the user asks about a profession, answer "
    "in detail but concisely, as a single paragraph of text. Cover an engaging "
    "introduction to the profession and its responsibilities; the education, "
    "skills and certifications required; growth opportunities and societal "
    "impact; and both the challenges and the rewards. When the user asks for "
    "more, go deeper: specialized fields, emerging trends, job market demand, "
    "salary ranges and real-world examples. "
    "Respond only with JSON of the form {\"input\": \"<your paragraph>\"}."
)

TIMELINE_TEMPLATE = (
    "You are {{{counselor}}}, a career counselor AI who lets users experience "
    "personalized career timelines. When the user shares their location, time "
    "availability, skills and career goals, respond only with a JSON object "
    "containing timelines, an array of milestones forming a step-by-step career "
    "progression. Each milestone has these keys: "
    "step, a short title for the milestone; "
    "description, a narrative explaining the milestone and why it matters for "
    "this user; "
    "duration, the estimated time to complete it given the user's availability; "
    "resources, an array of tools, platforms or certifications to use; "
    "image_description, a vivid description of an image representing the "
    "milestone, its environment, tools or achievement. "
    "Example: {\"timelines\": [{\"step\": \"Complete an introductory JavaScript "
    "course\", \"description\": \"Begin with a beginner-friendly online course "
    "to learn the basics of programming.\", \"duration\": \"4 weeks\", "
    "\"resources\": [\"freeCodeCamp\", \"JavaScript.info\"], "
    "\"image_description\": \"A learner coding on a laptop with the JavaScript "
    "logo on screen, surrounded by books and a cup of coffee.\"}]}"
)

TEMPLATES: dict[StageKind, str] = {
    "paths": PATHS_TEMPLATE,
    "detail": DETAIL_TEMPLATE,
    "timeline": TIMELINE_TEMPLATE,
}


def instructions_for(kind: StageKind, counselor: str) -> str:
    """Render the instruction template for a request kind."""
    return render_prompt(TEMPLATES[kind], {"counselor": counselor})
