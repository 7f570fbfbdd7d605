"""AI-powered feedback services using OpenAI.

One client covers the three external calls the dashboard makes: classifying
a feedback text, inventing a realistic feedback text for the live feed, and
writing an executive summary over the collected feedback.
"""
import json
import asyncio
import logging
from typing import Dict, Any, List, Optional, Type, TypeVar
from openai import AsyncOpenAI
from pydantic import BaseModel
from .config import config
from .schemas import AnalysisResult, CompanyProfile, FeedbackSource, SummaryContent, SyntheticFeedback

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

CLASSIFICATION_FIELDS = ["sentiment", "emotion", "intensity", "topics"]
GENERATION_FIELDS = ["text"]
SUMMARY_FIELDS = ["overview", "topIssues", "recommendations"]


class AIProviderError(Exception):
    """Raised when the AI provider cannot produce a usable response."""


def build_profile_context(profile: Optional[CompanyProfile]) -> str:
    """Describe the company for the prompt, or return "" when no name is set."""
    if profile is None or not profile.is_configured:
        return ""

    context = f'\nContext: You are analyzing feedback for "{profile.name.strip()}"'
    if profile.industry.strip():
        context += f", a company in the {profile.industry.strip()} industry"
    context += "."
    if profile.description.strip():
        context += f"\nCompany Description: {profile.description.strip()}"
    return context


class AIAnalyzer:
    """Handles AI-based classification, feedback synthesis and summaries."""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        """Initialize the AI analyzer.

        Args:
            client: Pre-built OpenAI client (built from config when omitted)
        """
        if client is None and config.OPENAI_API_KEY:
            client = AsyncOpenAI(api_key=config.OPENAI_API_KEY)
        self.client = client
        self.model = config.AI_MODEL
        self.timeout = config.AI_TIMEOUT_SECONDS

    @property
    def available(self) -> bool:
        return self.client is not None

    def _build_classification_prompt(self, feedback_text: str, profile: Optional[CompanyProfile]) -> str:
        """Build the prompt for classifying one feedback text.

        Design considerations:
        - Clear output format (JSON) for reliable parsing
        - Exact sentiment labels so no remapping is needed
        - Intensity scale spelled out, 0 is never a valid answer
        """
        context = build_profile_context(profile)

        prompt = f"""Analyze the following customer feedback for a brand. Be objective and precise.{context}

FEEDBACK: "{feedback_text}"

Return ONLY a valid JSON object with these fields:
- sentiment: one of ["Positive", "Negative", "Neutral"]
- emotion: the primary emotion detected (e.g. "Anger", "Joy", "Frustration")
- intensity: integer from 1 to 10 for how strong the emotion is
- topics: list of 1-3 short topic tags discussed (e.g. ["Shipping", "Pricing"])
- actionableInsight: a short, strategic recommendation for the brand based on this feedback

Examples:
- "Absolutely loving the new dark mode!" → {{"sentiment": "Positive", "emotion": "Excited", "intensity": 9, "topics": ["Dark Mode", "Design"], "actionableInsight": "Highlight dark mode in marketing materials."}}
- "My package was delayed by 3 days." → {{"sentiment": "Neutral", "emotion": "Disappointed", "intensity": 5, "topics": ["Shipping"], "actionableInsight": "Investigate carrier delays in this region."}}

Return ONLY the JSON object, no additional text:"""

        return prompt

    def _build_generation_prompt(self, profile: Optional[CompanyProfile]) -> str:
        """Build the prompt for inventing one live-feed feedback item."""
        context = build_profile_context(profile)
        sources = ", ".join(
            f'"{source.value}"' for source in FeedbackSource
            if source not in (FeedbackSource.DIRECT_INPUT, FeedbackSource.LIVE_FEED)
        )

        return f"""Write one realistic, short piece of customer feedback about a brand, as a customer would post it.{context}
Vary the tone: it may be positive, negative or neutral, and may mention product, pricing, shipping, support or the app.

Return ONLY a valid JSON object with these fields:
- text: the feedback text, 1-3 sentences
- source: one of [{sources}]

Return ONLY the JSON object, no additional text:"""

    def _build_summary_prompt(self, feedback_lines: str, profile: Optional[CompanyProfile]) -> str:
        """Build the executive summary prompt over pre-formatted feedback lines."""
        context = build_profile_context(profile)

        return f"""You are a Chief Customer Officer. Provide a specific executive summary based on the following feedback logs. Focus on patterns, root causes, and business impact.{context}

Feedback Logs:
{feedback_lines}

Return ONLY a valid JSON object with these fields:
- overview: a 2-sentence executive summary of the overall brand sentiment
- topIssues: list of the top 3 most critical negative issues identified
- recommendations: list of 3 strategic actions the company should take immediately

Return ONLY the JSON object, no additional text:"""

    async def classify(self, feedback_text: str, profile: Optional[CompanyProfile] = None) -> AnalysisResult:
        """Classify feedback using OpenAI API.

        Args:
            feedback_text: The customer feedback to analyze
            profile: Company context for the prompt

        Returns:
            AnalysisResult with sentiment, emotion, intensity, topics and insight

        Raises:
            AIProviderError: If AI provider fails (caller should degrade to a sentinel)
        """
        prompt = self._build_classification_prompt(feedback_text, profile)
        result_text = await self._complete(
            prompt,
            system="You are a customer feedback analyzer. Always respond with valid JSON only.",
            temperature=0.2,  # Low temperature for consistent classification
            max_tokens=300
        )
        return self._to_model(result_text, AnalysisResult, CLASSIFICATION_FIELDS)

    async def generate_feedback(self, profile: Optional[CompanyProfile] = None) -> SyntheticFeedback:
        """Invent a plausible feedback text for the live feed.

        Raises:
            AIProviderError: If AI provider fails (the poll cycle is skipped)
        """
        prompt = self._build_generation_prompt(profile)
        result_text = await self._complete(
            prompt,
            system="You simulate customers writing feedback. Always respond with valid JSON only.",
            temperature=0.9,
            max_tokens=200
        )
        return self._to_model(result_text, SyntheticFeedback, GENERATION_FIELDS)

    async def summarize(self, feedback_lines: str, profile: Optional[CompanyProfile] = None) -> SummaryContent:
        """Write an executive summary over formatted feedback lines.

        Args:
            feedback_lines: One "- [sentiment] (topics): text" line per item
            profile: Company context for the prompt

        Returns:
            SummaryContent with overview, top issues and recommendations

        Raises:
            AIProviderError: If AI provider fails (caller returns a sentinel summary)
        """
        prompt = self._build_summary_prompt(feedback_lines, profile)
        result_text = await self._complete(
            prompt,
            system="You write concise executive reports. Always respond with valid JSON only.",
            temperature=0.5,
            max_tokens=800
        )
        return self._to_model(result_text, SummaryContent, SUMMARY_FIELDS)

    async def _complete(self, prompt: str, system: str, temperature: float, max_tokens: int) -> str:
        """Run one chat completion and return the raw text.

        Raises:
            AIProviderError: On missing client, timeout, transport error or empty reply
        """
        if not self.client:
            raise AIProviderError("OpenAI client not configured")

        try:
            async with asyncio.timeout(self.timeout):
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": prompt}
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                    response_format={"type": "json_object"}
                )
        except asyncio.TimeoutError as e:
            raise AIProviderError(f"AI provider timeout after {self.timeout}s") from e
        except Exception as e:
            raise AIProviderError(f"AI provider error: {str(e)}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise AIProviderError("No data returned from AI provider")

        logger.debug(f"AI response received ({len(content)} chars)")

        return content.strip()

    def _to_model(self, result_text: str, model: Type[ModelT], required_fields: List[str]) -> ModelT:
        try:
            result = self._parse_ai_response(result_text, required_fields)
            return model.model_validate(result)
        except ValueError as e:
            raise AIProviderError(f"Failed to parse AI response: {e}") from e

    def _parse_ai_response(self, response_text: str, required_fields: List[str]) -> Dict[str, Any]:
        """Parse and check an AI response.

        Handles common AI output issues:
        - Markdown code fences around the JSON
        - Extra text around the JSON object
        - Missing fields
        """
        response_text = response_text.strip()
        if response_text.startswith("```"):
            response_text = response_text.replace("```json", "").replace("```", "").strip()

        try:
            result = json.loads(response_text)
        except json.JSONDecodeError:
            # Try to find JSON object in the text
            start = response_text.find("{")
            end = response_text.rfind("}") + 1
            if start != -1 and end > start:
                result = json.loads(response_text[start:end])
            else:
                raise

        if not isinstance(result, dict):
            raise ValueError("AI response is not a JSON object")

        for field in required_fields:
            if field not in result:
                raise ValueError(f"Missing required field: {field}")

        return result
