import asyncio
import json
from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from main import route_text_message
from src.bot.handlers.activity import water_callback
from src.bot.handlers.plans import mark_done_callback, my_plans_callback
from src.bot.handlers.profile import handle_language_callback, new_plan_callback
from src.bot.session import STORAGE_RESET_MESSAGE, get_tracker
from src.bot.states import BotState
from src.config import ACTIVITY_LOG_KEY
from src.database.models import (
    ActivityEntry,
    ActivityKind,
    ActivityLevel,
    FitnessGoal,
    Gender,
    Intensity
)


class BlockingPlanGenerator:
    """Генератор, который отвечает только после release.set()"""

    def __init__(self, plan):
        self.plan = plan
        self.release = asyncio.Event()

    async def generate_fitness_plan(self, profile):
        await self.release.wait()
        return self.plan


def make_context(storage, generator=None):
    context = MagicMock()
    context.user_data = {}
    context.bot_data = {'storage_factory': lambda namespace: storage, 'openai': generator}
    return context


def callback_update(data):
    update = MagicMock()
    update.effective_user.id = 42
    update.callback_query.data = data
    update.callback_query.answer = AsyncMock()
    update.callback_query.edit_message_text = AsyncMock()
    update.effective_message.reply_text = AsyncMock()
    return update


def text_update(text):
    update = MagicMock()
    update.effective_user.id = 42
    update.callback_query = None
    update.message.text = text
    update.message.reply_text = AsyncMock()
    update.effective_message.reply_text = update.message.reply_text
    return update


def replies(mock):
    return [call.args[0] for call in mock.await_args_list]


@pytest.fixture
def context(storage, generator):
    return make_context(storage, generator)


@pytest.fixture
def record(context, profile):
    tracker = get_tracker(callback_update("my_plans"), context)
    return asyncio.run(tracker.generate_and_save(profile))


def test_mark_done_twice_logs_once(context, record):
    first = callback_update(f"done_{record.id}_Monday")
    second = callback_update(f"done_{record.id}_Monday")

    asyncio.run(mark_done_callback(first, context))
    asyncio.run(mark_done_callback(second, context))

    tracker = context.user_data['tracker']
    assert len(tracker.activity_log.entries) == 1
    assert tracker.activity_log.entries[0].type == "Squats"
    first.callback_query.edit_message_text.assert_awaited_once()
    second.callback_query.answer.assert_awaited_once_with("Этот день уже отмечен")
    second.callback_query.edit_message_text.assert_not_awaited()


@pytest.mark.parametrize("data", ["done_missing_Monday", "done_{id}_Someday"])
def test_mark_done_unknown_plan_or_day(context, record, data):
    update = callback_update(data.format(id=record.id))

    asyncio.run(mark_done_callback(update, context))

    update.callback_query.answer.assert_awaited_once_with("❌ План не найден")
    assert context.user_data['tracker'].activity_log.entries == []
    assert record.completion == {}


def test_mark_done_sends_level_up(storage, generator, profile):
    # четыре дня с тренировками до сегодняшнего
    history = [
        ActivityEntry(
            f"w{i}", date.today() - timedelta(days=i), ActivityKind.WORKOUT, "Running",
            duration_minutes=30, intensity=Intensity.MEDIUM
        ).to_dict()
        for i in range(1, 5)
    ]
    storage.set(ACTIVITY_LOG_KEY, json.dumps(history))
    context = make_context(storage, generator)
    record = asyncio.run(get_tracker(callback_update("my_plans"), context).generate_and_save(profile))

    update = callback_update(f"done_{record.id}_Monday")
    asyncio.run(mark_done_callback(update, context))

    messages = replies(update.effective_message.reply_text)
    assert len(messages) == 1
    assert "Ты достиг уровня 2!" in messages[0]
    assert context.user_data['level_ups'] == []


def test_reset_notice_sent_on_first_screen(storage):
    storage.set(ACTIVITY_LOG_KEY, "{broken")
    context = make_context(storage)

    first = callback_update("water")
    asyncio.run(water_callback(first, context))
    second = callback_update("my_plans")
    asyncio.run(my_plans_callback(second, context))

    assert replies(first.effective_message.reply_text) == [STORAGE_RESET_MESSAGE]
    second.effective_message.reply_text.assert_not_awaited()
    assert storage.data == {}


def test_generating_blocks_resubmission(storage, plan):
    async def scenario():
        generator = BlockingPlanGenerator(plan)
        context = make_context(storage, generator)
        context.user_data['state'] = BotState.PROFILE_LANGUAGE
        context.user_data['profile_data'] = {
            'age': 30,
            'gender': Gender.MALE,
            'weight': 80.0,
            'height': 180.0,
            'activity_level': ActivityLevel.MODERATELY_ACTIVE,
            'goal': FitnessGoal.GAIN_MUSCLE,
            'timeframe': 12,
            'water_intake': 3.0,
            'preferred_foods': None
        }

        task = asyncio.create_task(handle_language_callback(callback_update("language_ENGLISH"), context))
        for _ in range(5):
            await asyncio.sleep(0)
        assert context.user_data['state'] == BotState.GENERATING

        message = text_update("31")
        await route_text_message(message, context)
        again = callback_update("new_plan")
        await new_plan_callback(again, context)

        assert context.user_data['state'] == BotState.GENERATING
        assert 'profile_data' in context.user_data
        generator.release.set()
        await task
        return context, message, again

    context, message, again = asyncio.run(scenario())

    assert replies(message.message.reply_text) == ["⏳ План еще составляется, подожди немного..."]
    again.callback_query.answer.assert_awaited_once_with("⏳ План уже составляется, подожди немного...")
    again.callback_query.edit_message_text.assert_not_awaited()
    assert context.user_data['state'] == BotState.IDLE
    assert len(context.user_data['tracker'].plan_history()) == 1
