# tests/test_task_form.py

from __future__ import annotations

import asyncio

import httpx
import pytest

from taskdesk.api.errors import NetworkError, ServerError
from taskdesk.core.forms import FieldValue, FormFieldError
from taskdesk.tasks.task_form import FormMode, FormState, TaskFormController
from taskdesk.tasks.task_models import Task

from .fakes import FakeNotifier, FakeTaskRepo


def _http_500() -> httpx.HTTPStatusError:
    request = httpx.Request("PUT", "http://api.test/tasks/42")
    response = httpx.Response(500, request=request, json={"message": "db down"})
    return httpx.HTTPStatusError("server error", request=request, response=response)


@pytest.mark.asyncio
async def test_no_id_means_create_mode(notifier: FakeNotifier) -> None:
    form = TaskFormController(FakeTaskRepo(), notifier)
    assert form.state == FormState.IDLE

    await form.activate()

    assert form.mode == FormMode.CREATE
    assert form.is_edit_mode is False
    assert form.state == FormState.EDITABLE
    assert form.values == {"titulo": "", "descripcion": ""}


@pytest.mark.asyncio
async def test_mode_is_resolved_once(notifier: FakeNotifier) -> None:
    form = TaskFormController(FakeTaskRepo(), notifier)
    await form.activate()

    with pytest.raises(RuntimeError):
        await form.activate("42")
    assert form.mode == FormMode.CREATE


@pytest.mark.asyncio
async def test_edit_mode_populates_fields_exactly(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo([Task(id="42", titulo="A", descripcion="B")])
    form = TaskFormController(repo, notifier)

    await form.activate("42")

    assert form.mode == FormMode.EDIT
    assert form.state == FormState.EDITABLE
    assert form.titulo == "A"
    assert form.descripcion == "B"
    assert repo.calls == [("get_task_by_id", "42")]


@pytest.mark.asyncio
async def test_edit_fetch_in_flight_is_loading_and_blocks_submit(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo([Task(id="42", titulo="A", descripcion="B")])
    repo.gates["get_task_by_id"] = asyncio.Event()
    form = TaskFormController(repo, notifier)

    activation = asyncio.create_task(form.activate("42"))
    await asyncio.sleep(0)
    assert form.state == FormState.LOADING
    assert await form.submit() is False

    repo.gates["get_task_by_id"].set()
    await activation
    assert form.state == FormState.EDITABLE


@pytest.mark.asyncio
async def test_edit_fetch_failure_leaves_form_empty_but_submittable(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo()
    repo.fail["get_task_by_id"] = NetworkError("offline")
    form = TaskFormController(repo, notifier)

    await form.activate("42")

    assert form.state == FormState.EDITABLE
    assert form.values == {"titulo": "", "descripcion": ""}
    assert notifier.notifications == []

    form.apply_fields([FieldValue("titulo", "T"), FieldValue("descripcion", "D")])
    assert await form.submit() is True

    (name, sent), = [c for c in repo.calls if c[0] == "update_task"]
    assert sent.id == "42"
    assert (sent.titulo, sent.descripcion) == ("T", "D")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("titulo", "descripcion", "missing"),
    [("", "desc", ["titulo"]), ("title", "", ["descripcion"]), ("", "", ["titulo", "descripcion"])],
)
async def test_invalid_submit_makes_no_call(
    notifier: FakeNotifier, titulo: str, descripcion: str, missing: list[str]
) -> None:
    repo = FakeTaskRepo()
    form = TaskFormController(repo, notifier)
    await form.activate()
    form.set_field("titulo", titulo)
    form.set_field("descripcion", descripcion)

    assert await form.submit() is False

    assert repo.calls == []
    assert form.state == FormState.EDITABLE
    assert sorted(form.field_errors) == sorted(missing)


@pytest.mark.asyncio
async def test_create_success_clears_form_and_notifies(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo()
    form = TaskFormController(repo, notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", "Buy milk"), FieldValue("descripcion", "two liters")])

    assert await form.submit() is True

    assert form.state == FormState.SUCCEEDED
    assert form.values == {"titulo": "", "descripcion": ""}
    assert len(notifier.of_type("success")) == 1
    (name, sent), = repo.calls
    assert name == "create_task"
    assert sent.id is None
    assert (sent.titulo, sent.descripcion) == ("Buy milk", "two liters")
    assert repo.tasks[0].id


@pytest.mark.asyncio
async def test_create_failure_keeps_form_for_retry(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo()
    repo.fail["create_task"] = ServerError("boom", status_code=500)
    form = TaskFormController(repo, notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", "Buy milk"), FieldValue("descripcion", "two liters")])

    assert await form.submit() is False

    assert form.state == FormState.EDITABLE
    assert form.values == {"titulo": "Buy milk", "descripcion": "two liters"}
    assert form.error
    assert len(notifier.of_type("error")) == 1

    del repo.fail["create_task"]
    assert await form.submit() is True
    assert form.error is None


@pytest.mark.asyncio
async def test_update_success_and_raw_error_details(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo([Task(id="42", titulo="A", descripcion="B")])
    form = TaskFormController(repo, notifier)
    await form.activate("42")
    form.set_field("descripcion", "B2")

    repo.fail["update_task"] = _http_500()
    assert await form.submit() is False
    assert form.state == FormState.EDITABLE
    assert form.values == {"titulo": "A", "descripcion": "B2"}
    assert form.error is not None and "500" in form.error

    del repo.fail["update_task"]
    assert await form.submit() is True
    assert form.state == FormState.SUCCEEDED
    assert form.values == {"titulo": "", "descripcion": ""}
    assert [n.type for n in notifier.notifications] == ["error", "success"]


@pytest.mark.asyncio
async def test_second_submit_while_submitting_is_ignored(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo()
    repo.gates["create_task"] = asyncio.Event()
    form = TaskFormController(repo, notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", "t"), FieldValue("descripcion", "d")])

    first = asyncio.create_task(form.submit())
    await asyncio.sleep(0)
    assert form.state == FormState.SUBMITTING

    assert await form.submit() is False

    repo.gates["create_task"].set()
    assert await first is True
    assert repo.count("create_task") == 1


@pytest.mark.asyncio
async def test_editing_after_success_returns_to_editable(notifier: FakeNotifier) -> None:
    form = TaskFormController(FakeTaskRepo(), notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", "t"), FieldValue("descripcion", "d")])
    await form.submit()
    assert form.state == FormState.SUCCEEDED

    form.set_field("titulo", "next")

    assert form.state == FormState.EDITABLE
    assert form.values == {"titulo": "next", "descripcion": ""}


@pytest.mark.asyncio
async def test_result_after_dispose_is_discarded(notifier: FakeNotifier) -> None:
    repo = FakeTaskRepo()
    form = TaskFormController(repo, notifier)
    await form.activate()
    form.apply_fields([FieldValue("titulo", "t"), FieldValue("descripcion", "d")])
    repo.on_call = lambda name: form.dispose()

    await form.submit()

    assert notifier.notifications == []
    assert form.values == {"titulo": "t", "descripcion": "d"}


def test_unknown_or_untyped_fields_are_rejected(notifier: FakeNotifier) -> None:
    form = TaskFormController(FakeTaskRepo(), notifier)

    with pytest.raises(FormFieldError):
        form.apply_fields([FieldValue("username", "ana")])
    with pytest.raises(FormFieldError):
        form.apply_fields([FieldValue("titulo", 3)])  # type: ignore[arg-type]

    assert form.values == {"titulo": "", "descripcion": ""}
