import logging
from typing import Optional, Union

from pydantic import ValidationError

from ..core.ai_client import AIClient, AIClientFactory, AIRequestError
from ..core.ids import new_id
from ..core.text import extract_ingredients, strip_markers
from ..infra.document_store import DocumentStore, chat_history_key
from ..schemas import ChatMessage, Recipe
from ..services.profile import ProfileService

logger = logging.getLogger("chefai.chat")

# The chat UI has no error channel: failures come back as ordinary AI messages.
MISSING_KEY_MESSAGE = (
    "Chef AI: Harap masukkan Gemini API Key Anda terlebih dahulu di Pengaturan "
    "(Ikon Profil di Home) untuk mengaktifkan fitur ini! 👨‍🍳🗝️"
)
RATE_LIMITED_MESSAGE = (
    "Maaf Chef, kuota API Gemini Anda telah habis atau sedang dibatasi (Error 429). 🛑\n\n"
    "Saran saya:\n1. Tunggu beberapa menit lalu coba lagi.\n2. Cek kuota Anda di Google AI Studio."
)
CONNECTION_FAILED_MESSAGE = (
    "Maaf Chef, sepertinya ada gangguan koneksi dengan asisten AI. Silakan coba lagi nanti! 👨‍🍳🔌"
)
HISTORY_UNAVAILABLE_MESSAGE = (
    "Maaf Chef, riwayat obrolan resep ini sedang tidak bisa dibuka. Silakan coba lagi sebentar lagi! 👨‍🍳"
)

SYSTEM_PROMPT = """You are "Chef AI", a friendly, professional culinary assistant helping the user cook one specific recipe.

Rules:
1. Answer accurately from the recipe data you are given.
2. Check every ingredient against the user's diet and allergy profile. If an ingredient is unsafe for them, say so clearly and suggest a safe substitute.
3. When asked about nutrition (calories, protein, ...) or about scaling portions, compute a reasonable estimate from the ingredient list and say it is an estimate.
4. For ingredient substitutions, keep the flavour balanced.
5. Reply in relaxed but professional Indonesian. Keep it short and practical for use in the kitchen.
6. Do not use markdown bold (**). Plain text only.
7. If the question is not about cooking or this recipe, politely steer back.
"""

RecipeLike = Union[Recipe, dict]


def _recipe(recipe: RecipeLike) -> Recipe:
    return recipe if isinstance(recipe, Recipe) else Recipe.model_validate(recipe)


def build_prompt(recipe: RecipeLike, question: str, preferences: str) -> str:
    recipe = _recipe(recipe)
    ingredients = extract_ingredients(recipe)
    ingredients_text = "\n".join(
        f"{i}. {ing.name}" + (f" - {ing.measure}" if ing.measure else "")
        for i, ing in enumerate(ingredients, start=1)
    ) or "(tidak tersedia)"

    return f"""
    RECIPE: {recipe.str_meal}
    CATEGORY: {recipe.str_category or '-'}
    ORIGIN: {recipe.str_area or '-'}

    INGREDIENTS:
    {ingredients_text}

    INSTRUCTIONS:
    {recipe.str_instructions or '(tidak tersedia)'}

    USER DIET / ALLERGY PROFILE: {preferences.strip() if preferences else 'Tidak ada batasan'}

    USER QUESTION: "{question}"
    """


class ChefChatAssistant:
    def __init__(
        self,
        store: DocumentStore,
        profile: ProfileService,
        client_factory: AIClientFactory = AIClient,
    ):
        self.store = store
        self.profile = profile
        self.client_factory = client_factory

    @staticmethod
    def greeting(recipe: RecipeLike) -> ChatMessage:
        recipe = _recipe(recipe)
        return ChatMessage(
            id="greeting",
            text=f"Halo! Saya Chef AI. Ada yang bisa saya bantu dengan resep {recipe.str_meal} ini?",
            sender="ai",
        )

    async def _load(self, recipe: Recipe) -> tuple[list[ChatMessage], bool]:
        """Return (messages, ok). ``ok`` is False when the stored transcript could not be read."""
        raw, ok = await self.store.load(chat_history_key(recipe.id_meal), None)
        if not ok:
            return [self.greeting(recipe)], False
        if not raw:
            return [self.greeting(recipe)], True
        try:
            return [ChatMessage.model_validate(m) for m in raw], True
        except ValidationError as e:
            logger.warning(f"Malformed transcript for {recipe.id_meal}: {e}")
            return [self.greeting(recipe)], False

    async def load_transcript(self, recipe: RecipeLike) -> list[ChatMessage]:
        """Stored transcript, or a fresh one holding only the greeting."""
        messages, _ = await self._load(_recipe(recipe))
        return messages

    async def save_transcript(self, id_meal: str, messages: list[ChatMessage]) -> bool:
        return await self.store.set(chat_history_key(id_meal), [m.model_dump() for m in messages])

    async def reset(self, recipe: RecipeLike) -> list[ChatMessage]:
        recipe = _recipe(recipe)
        messages = [self.greeting(recipe)]
        await self.save_transcript(recipe.id_meal, messages)
        return messages

    async def ask(self, recipe: RecipeLike, question: str) -> str:
        """One question, one answer. Never raises; failures return a fixed apology."""
        api_key = await self.profile.get_active_api_key()
        if api_key is None:
            logger.warning("No Gemini API key configured, chat disabled")
            return MISSING_KEY_MESSAGE

        preferences = await self.profile.get_preferences()
        prompt = build_prompt(recipe, question, preferences)

        try:
            client = self.client_factory(api_key)
            answer = await client.generate_text(prompt, system_instruction=SYSTEM_PROMPT)
        except AIRequestError as e:
            if e.rate_limited:
                return RATE_LIMITED_MESSAGE
            return CONNECTION_FAILED_MESSAGE
        except Exception as e:
            logger.error(f"Chef chat failed: {e.__class__.__name__}: {e}")
            return CONNECTION_FAILED_MESSAGE

        return strip_markers(answer)

    async def send(self, recipe: RecipeLike, question: str) -> Optional[list[ChatMessage]]:
        """
        Append the question and the answer to the recipe's transcript.
        The transcript is persisted once the answer is in. Blank questions are ignored.
        """
        question = (question or "").strip()
        if not question:
            return None

        recipe = _recipe(recipe)
        messages, ok = await self._load(recipe)
        messages.append(ChatMessage(id=new_id(), text=question, sender="user"))

        if not ok:
            # Never overwrite a transcript we could not read.
            logger.error(f"Transcript for {recipe.id_meal} unreadable, not asking or saving")
            messages.append(ChatMessage(id=new_id(), text=HISTORY_UNAVAILABLE_MESSAGE, sender="ai"))
            return messages

        answer = await self.ask(recipe, question)
        messages.append(ChatMessage(id=new_id(), text=answer, sender="ai"))

        if not await self.save_transcript(recipe.id_meal, messages):
            logger.error(f"Transcript for {recipe.id_meal} not persisted")
        return messages
