import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.services.openai_service import OpenAIService
from src.utils.errors import GenerationFailure

from tests.conftest import plan_dict


def make_response(content):
    response = MagicMock()
    response.choices[0].message.content = content
    return response


def make_service(content=None, error=None):
    service = OpenAIService("test-key")
    service.client = MagicMock()
    if error:
        service.client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        service.client.chat.completions.create = AsyncMock(return_value=make_response(content))
    return service


def test_generate_fitness_plan_parses_response(profile):
    service = make_service(json.dumps(plan_dict(water=2.8)))

    plan = asyncio.run(service.generate_fitness_plan(profile))

    assert plan.recommended_water_intake == 2.8
    assert plan.workout_plan["Monday"] == ["Squats (3x10)", "Push-ups"]
    kwargs = service.client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert "English" in kwargs["messages"][1]["content"]


@pytest.mark.parametrize("content", ["not json", json.dumps({"summary": "only summary"})])
def test_unusable_response_raises_generation_failure(profile, content):
    service = make_service(content)
    with pytest.raises(GenerationFailure):
        asyncio.run(service.generate_fitness_plan(profile))


def test_api_error_raises_generation_failure(profile):
    service = make_service(error=RuntimeError("connection reset"))
    with pytest.raises(GenerationFailure):
        asyncio.run(service.generate_fitness_plan(profile))


def test_prompt_includes_profile(profile):
    prompt = OpenAIService.build_prompt(profile)
    assert "80.0" in prompt
    assert "Gain Muscle" in prompt
    assert "chicken, brown rice, broccoli" in prompt
    assert "recommended_water_intake" in prompt


def test_generation_does_not_block_event_loop(profile):
    service = make_service()

    async def scenario():
        release = asyncio.Event()

        async def slow_create(**kwargs):
            await release.wait()
            return make_response(json.dumps(plan_dict()))

        service.client.chat.completions.create = AsyncMock(side_effect=slow_create)
        task = asyncio.create_task(service.generate_fitness_plan(profile))

        # пока модель отвечает, цикл событий обслуживает другие корутины
        await asyncio.sleep(0)
        assert not task.done()
        release.set()
        return await task

    plan = asyncio.run(scenario())
    assert plan.recommended_water_intake == 3.5
