import logging
from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from app.core.config import Config, config as default_config

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class LLMWrapper:
    """
    Centralized LLM Wrapper for the news check service.

    Standardizes model configuration. Constructed explicitly by whoever needs
    a model client, so tests can substitute a fake chat model instead.
    """

    def __init__(self, settings: Optional[Config] = None):
        settings = settings or default_config
        self.model_name = settings.LLM_MODEL_NAME
        self.temperature = settings.LLM_TEMPERATURE
        self.max_tokens = settings.LLM_MAX_TOKEN
        self.api_key = settings.GEMINI_API_KEY

        if not self.api_key:
            raise ValueError("GEMINI_API_KEY is not set in the environment variables.")

        logger.info(f"Initializing Gemini chat model: {self.model_name}")
        self.llm = ChatGoogleGenerativeAI(
            model=self.model_name,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            google_api_key=self.api_key
        )

    def get_llm(self):
        """Returns the underlying LLM instance."""
        return self.llm
