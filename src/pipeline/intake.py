"""
Plinth — Interactive Intake
============================
Walks the user through the framework one question at a time. Each answer is
validated before moving on; an empty answer re-asks the same question.

`ask` and `echo` default to input/print and can be swapped out in tests.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.pipeline.positioning import PositioningBuilder, PositioningInput
from src.utils.text_utils import style


class InputValidationError(ValueError):
    """Raised for an empty answer; turned into a re-prompt."""


@dataclass(frozen=True)
class Question:
    setter: str                     # PositioningBuilder method that receives the answer
    prompt: str
    required_message: str
    title: Optional[str] = None     # Step banner
    hint: Optional[str] = None
    is_list: bool = False           # Comma-separated answer
    done_message: str = ""


QUESTIONS = (
    Question(
        setter="set_product_name",
        prompt="📦 What's your product name? ",
        required_message="Product name is required",
        done_message="Product name set",
    ),
    Question(
        setter="add_competitive_alternatives",
        title="Step 1: Competitive Alternatives",
        hint="What would customers use if you didn't exist?",
        prompt="🔄 List competitive alternatives (comma-separated): ",
        required_message="At least one alternative is required",
        is_list=True,
        done_message="Competitive alternatives captured",
    ),
    Question(
        setter="add_unique_attributes",
        title="Step 2: Unique Attributes",
        hint="What features/capabilities do you have that alternatives don't?",
        prompt="⭐ List unique attributes (comma-separated): ",
        required_message="At least one attribute is required",
        is_list=True,
        done_message="Unique attributes captured",
    ),
    Question(
        setter="add_value_themes",
        title="Step 3: Value Themes",
        hint="What value do those unique attributes enable?",
        prompt="💎 List value themes (comma-separated): ",
        required_message="At least one value theme is required",
        is_list=True,
        done_message="Value themes captured",
    ),
    Question(
        setter="set_target_market",
        title="Step 4: Target Market",
        hint="Who cares most about this value?",
        prompt="🎯 Describe your target market: ",
        required_message="Target market is required",
        done_message="Target market captured",
    ),
    Question(
        setter="set_market_category",
        title="Step 5: Market Category",
        hint="What market category makes your value obvious?",
        prompt="📊 What market category are you in? ",
        required_message="Market category is required",
        done_message="Market category captured",
    ),
)

EXPORT_CHOICES = (
    ("Markdown (.md)", "markdown"),
    ("Text (.txt)", "text"),
    ("JSON (.json)", "json"),
    ("Skip export", "none"),
)


def split_list(answer: str) -> list[str]:
    """Comma-separated answer → trimmed items."""
    return [item.strip() for item in answer.split(",")]


def parse_answer(question: Question, answer: str):
    if not answer:
        raise InputValidationError(question.required_message)
    return split_list(answer) if question.is_list else answer


def ask_question(question: Question, ask: Callable[[str], str] = input,
                 echo: Callable[[str], None] = print):
    """Ask until a non-empty answer comes back."""
    while True:
        try:
            return parse_answer(question, ask(question.prompt))
        except InputValidationError as e:
            echo(style(f">> {e}", "red"))


def collect_input(ask: Callable[[str], str] = input,
                  echo: Callable[[str], None] = print) -> PositioningInput:
    builder = PositioningBuilder()

    for question in QUESTIONS:
        if question.title:
            echo(style(question.title, "bold", "cyan"))
            echo(style(f"{question.hint}\n", "gray"))

        value = ask_question(question, ask=ask, echo=echo)
        getattr(builder, question.setter)(value)

        echo(style(f"\n✓ {question.done_message}\n", "green"))

    return builder.build()


def choose_export_format(ask: Callable[[str], str] = input,
                         echo: Callable[[str], None] = print) -> str:
    """Numbered menu; accepts the number or the format name."""
    echo(style("💾 Export your positioning document?", "bold"))
    for i, (label, _) in enumerate(EXPORT_CHOICES, 1):
        echo(f"  {i}. {label}")

    values = [value for _, value in EXPORT_CHOICES]
    while True:
        answer = ask("Choose [1-4]: ").strip().lower()
        if answer.isdigit() and 1 <= int(answer) <= len(values):
            return values[int(answer) - 1]
        if answer in values:
            return answer
        echo(style(">> Pick one of the listed options", "red"))
