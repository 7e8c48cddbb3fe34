"""Pre-configured prompts offered as one-click shortcuts.

Quick actions are plain prompts: running one goes through
``ConversationManager.send`` exactly like typed input.
"""

from pydantic import BaseModel, ConfigDict


class QuickAction(BaseModel):
    """A canned prompt with display metadata."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    description: str
    prompt: str


QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction(
        key="sales-trends",
        title="Analyze Sales Trends",
        description="Get insights on your sales performance",
        prompt="Analyze my current sales trends and provide recommendations for improvement",
    ),
    QuickAction(
        key="inventory",
        title="Inventory Optimization",
        description="Optimize your stock levels",
        prompt="Help me optimize my inventory levels based on current sales data",
    ),
    QuickAction(
        key="products",
        title="Product Recommendations",
        description="Get AI-powered product suggestions",
        prompt="What products should I consider adding to my inventory based on market trends?",
    ),
    QuickAction(
        key="pricing",
        title="Pricing Strategy",
        description="Optimize your pricing strategy",
        prompt="Analyze my pricing strategy and suggest improvements for better profitability",
    ),
)


def get_quick_action(key: str) -> QuickAction:
    """Look up a quick action by key.

    Raises:
        KeyError: If no action has that key
    """
    for action in QUICK_ACTIONS:
        if action.key == key.lower():
            return action
    raise KeyError(
        f"Unknown quick action: {key}. "
        f"Available: {', '.join(action.key for action in QUICK_ACTIONS)}"
    )
