"""Built-in specialist agents shipped with every deployment."""

from __future__ import annotations

from cleorouter.models.agent import AgentProfile

BUILTIN_AGENTS: tuple[AgentProfile, ...] = (
    AgentProfile(
        id="jenn-community",
        name="Jenn",
        description="Community manager: social media, Telegram channels, engagement",
        tags=("social", "telegram", "twitter", "community"),
        tools=("postTweet", "publishToTelegramChannel"),
        builtin=True,
    ),
    AgentProfile(
        id="ami-creative",
        name="Ami",
        description="Executive assistant: calendar, Notion workspace, organization",
        tags=("calendar", "notion", "admin"),
        tools=("listCalendarEvents", "createCalendarEvent", "createNotionPage"),
        builtin=True,
    ),
    AgentProfile(
        id="toby-technical",
        name="Toby",
        description="Software engineer: code, APIs, debugging, deployments",
        tags=("technical", "programming", "debugging"),
        tools=("runCode", "searchDocs"),
        builtin=True,
    ),
    AgentProfile(
        id="peter-financial",
        name="Peter",
        description="Google Workspace and financial modelling specialist",
        tags=("google", "docs", "sheets", "finance"),
        tools=("createGoogleDoc", "createGoogleSheet"),
        builtin=True,
    ),
    AgentProfile(
        id="apu-support",
        name="Apu",
        description="Research and market intelligence: news, stocks, academic search",
        tags=("research", "market", "news"),
        tools=("webSearch", "stockQuote", "scholarSearch"),
        builtin=True,
    ),
    AgentProfile(
        id="emma-ecommerce",
        name="Emma",
        description="E-commerce operations: Shopify products, inventory, sales",
        tags=("ecommerce", "shopify", "sales"),
        tools=("getShopifyProducts", "getShopifyOrders"),
        builtin=True,
    ),
    AgentProfile(
        id="wex-intelligence",
        name="Wex",
        description="Web automation: browsing, scraping, form filling, screenshots",
        tags=("automation", "browser", "scraping"),
        tools=("browserTask", "screenshot"),
        builtin=True,
    ),
    AgentProfile(
        id="astra-email",
        name="Astra",
        description="Email drafting and sending",
        tags=("email", "gmail", "communication"),
        tools=("sendGmailMessage", "draftGmailMessage"),
        builtin=True,
    ),
    AgentProfile(
        id="nora-medical",
        name="Nora",
        description="Health and medical information",
        tags=("medical", "health"),
        tools=("webSearch",),
        builtin=True,
    ),
    AgentProfile(
        id="iris-insights",
        name="Iris",
        description="Insights and reporting over documents and data",
        tags=("insights", "analysis", "reports"),
        tools=("analyzeDocument",),
        builtin=True,
    ),
)

BUILTIN_IDS = frozenset(a.id for a in BUILTIN_AGENTS)
