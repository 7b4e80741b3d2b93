# app/services/news_checker.py
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from app.core.models import CheckNewsRequest, ClassificationResult, NewsKind
from app.services.normalizer import normalize

log = logging.getLogger(__name__)


SYSTEM_PROMPT = """
You are an AI fake news detection system.

Given a news item (either full text or URL), you must respond ONLY in valid JSON with this shape:

{{
  "label": "fake" | "real" | "uncertain",
  "confidence": 0.0 to 1.0,
  "explanation": "short explanation in simple English"
}}

Rules:
- "fake" = very likely false / misleading
- "real" = very likely true / credible
- "uncertain" = not enough information to decide
- confidence = number between 0 and 1
- Do NOT add any extra text outside the JSON.
"""


def build_user_content(request: CheckNewsRequest) -> str:
    if request.type == NewsKind.TEXT:
        return f"News text:\n{request.text}"
    return (
        f"News URL: {request.url}\n"
        'If you cannot actually open the URL, mark label as "uncertain" and explain why.'
    )


class NewsCheckAgent:
    """
    Asks the chat model for a verdict on a news item and normalizes the reply.

    The model is injected so any LangChain chat model (including fakes in
    tests) can stand in for Gemini.
    """

    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("human", "{content}")
        ])
        self.chain = self.prompt | self.llm | StrOutputParser()

    async def run(self, request: CheckNewsRequest) -> ClassificationResult:
        """
        Classify a single news item.

        Errors raised by the model call propagate to the caller; only the
        completion text goes through normalization.
        """
        content = build_user_content(request)
        log.info(f"NewsCheckAgent checking {request.type.value}: {content[:60]}...")

        raw_text = await self.chain.ainvoke({"content": content})
        result = normalize(raw_text)

        log.info(f"Verdict: {result.label.value} (confidence {result.confidence})")
        return result
