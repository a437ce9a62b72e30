import logging
from typing import Dict, Optional

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from site_analyzer.config import (
    FALLBACK_MODEL,
    FALLBACK_TEMPERATURE,
    FALLBACK_TIMEOUT_SEC,
    OPENAI_API_KEY,
    VERTICAL_HINTS,
)
from site_analyzer.crawlers.urls import CrawlTarget

logger = logging.getLogger(__name__)

DISCLOSURE_NOTE = (
    "[NOTE: This content was AI-generated because the direct site crawl was blocked.]"
)

SIMULATED_CRAWL_PROMPT = ChatPromptTemplate.from_messages([
    (
        "system",
        "You are a highly advanced web crawler simulator. "
        "You produce realistic plain-text exports of company websites."
    ),
    (
        "user",
        "The user is trying to scrape the website \"{url}\" for the company "
        "\"{domain}\" to build a customer service chatbot.\n"
        "However, the site is blocking bots or is unavailable.\n\n"
        "Your task is to GENERATE a realistic, detailed, and comprehensive "
        "\"Simulated Website Crawl\" for this company based on your public "
        "knowledge of them.\n\n"
        "Include:\n"
        "1. A rich \"Home Page\" section with their likely value proposition and services.\n"
        "2. A \"Services/Products\" section detailing what they offer (be specific for {domain}).\n"
        "3. A \"Pricing\" section (can be estimated or standard for the industry).\n"
        "4. An \"FAQ\" section with 5-10 common customer questions and answers.\n"
        "5. A \"Contact\" section.\n"
        "{special_section}\n"
        "Format the output exactly like a scraped text export:\n\n"
        "WEBSITE: {domain} ({url})\n\n"
        "--- HOME PAGE ---\n"
        "[Generated Home Content...]\n\n"
        "--- PAGE: /services ---\n"
        "[Generated Services Content...]\n\n"
        "--- PAGE: /pricing ---\n"
        "[Generated Pricing Content...]\n\n"
        "{special_page}"
        "--- PAGE: /faq ---\n"
        "[Generated FAQ Content...]\n\n"
        "--- PAGE: /contact ---\n"
        "[Generated Contact Content...]\n\n"
        "Make it sound authentic, professional, and specific to the brand \"{domain}\"."
    ),
])


def match_vertical(domain: str) -> Optional[Dict]:
    for hint in VERTICAL_HINTS:
        if any(k in domain for k in hint["keywords"]):
            return hint
    return None


def build_prompt_messages(target: CrawlTarget):
    hint = match_vertical(target.domain)

    special_section = ""
    special_page = ""
    if hint:
        special_section = f"6. SPECIAL SECTION: {hint['instructions']}\n"
        special_page = f"--- PAGE: {hint['page']} ---\n{hint['page_hint']}\n\n"

    return SIMULATED_CRAWL_PROMPT.format_messages(
        url=target.url,
        domain=target.domain,
        special_section=special_section,
        special_page=special_page,
    )


def generate_simulated_crawl(
    target: CrawlTarget,
    *,
    timeout: float = FALLBACK_TIMEOUT_SEC,
) -> Optional[str]:
    """
    Ask the chat model for a plausible crawl export of the target site.
    Single attempt: the client's built-in retries are turned off.

    Returns None when no OpenAI credential is configured.
    Provider errors (including timeouts) propagate to the caller.
    """

    if not OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set, simulated crawl disabled")
        return None

    llm = ChatOpenAI(
        model=FALLBACK_MODEL,
        temperature=FALLBACK_TEMPERATURE,
        timeout=timeout,
        max_retries=0,
        api_key=OPENAI_API_KEY,
    )

    return llm.invoke(build_prompt_messages(target)).content.strip()
