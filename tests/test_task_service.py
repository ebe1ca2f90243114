"""Tests for TaskService: validation, ownership, filtering and paging."""

import uuid

import pytest
import pytest_asyncio

from task_tracker_api.app.core.errors import (
    EmptyTitle,
    InvalidStatus,
    ProjectNotFound,
    TaskNotFound,
    TitleTooLong,
)
from task_tracker_api.app.schemas.task import TaskCreate, TaskListParams, TaskStatus, TaskUpdate
from task_tracker_api.app.services.project_service import ProjectService
from task_tracker_api.app.services.task_service import TaskService


@pytest_asyncio.fixture
async def project_id(database):
    project = await ProjectService.create_project("Host")
    return str(project.id)


async def make_tasks(project_id, clock, *titles):
    tasks = []
    for title in titles:
        tasks.append(await TaskService.create_task(project_id, TaskCreate(title=title), now=clock()))
    return tasks


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_defaults(self, project_id):
        task = await TaskService.create_task(project_id, TaskCreate(title="  Write docs "))

        assert task.title == "Write docs"
        assert task.status is TaskStatus.TODO
        assert task.description is None
        assert str(task.project_id) == project_id
        assert task.created_at == task.updated_at

    @pytest.mark.asyncio
    async def test_status_is_case_insensitive(self, project_id):
        task = await TaskService.create_task(project_id, TaskCreate(title="T", status="in_progress"))
        assert task.status is TaskStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_round_trip(self, project_id):
        created = await TaskService.create_task(
            project_id, TaskCreate(title="T", description="  details ", status="done")
        )
        fetched = await TaskService.get_task(project_id, str(created.id))

        assert fetched == created
        assert fetched.description == "details"

    @pytest.mark.asyncio
    async def test_empty_description_round_trips_as_absent(self, project_id):
        created = await TaskService.create_task(project_id, TaskCreate(title="T", description="   "))
        fetched = await TaskService.get_task(project_id, str(created.id))

        assert created.description is None
        assert fetched == created

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, error",
        [
            ({"title": "  "}, EmptyTitle),
            ({"title": "x" * 201}, TitleTooLong),
            ({"title": "ok", "status": "WHATEVER"}, InvalidStatus),
        ],
    )
    async def test_validation_errors(self, project_id, payload, error):
        with pytest.raises(error):
            await TaskService.create_task(project_id, TaskCreate(**payload))

    @pytest.mark.asyncio
    async def test_unknown_project(self, database):
        with pytest.raises(ProjectNotFound):
            await TaskService.create_task(str(uuid.uuid4()), TaskCreate(title="NA"))

    @pytest.mark.asyncio
    async def test_validation_runs_before_project_check(self, database):
        with pytest.raises(InvalidStatus):
            await TaskService.create_task(str(uuid.uuid4()), TaskCreate(title="NA", status="nope"))

    @pytest.mark.asyncio
    async def test_project_vanishing_after_check_is_not_found(self, database, monkeypatch):
        async def always_exists(project_id):
            return None

        monkeypatch.setattr(ProjectService, "ensure_project_exists", always_exists)

        with pytest.raises(ProjectNotFound):
            await TaskService.create_task(str(uuid.uuid4()), TaskCreate(title="orphan"))


class TestGetTask:
    @pytest.mark.asyncio
    async def test_cross_project_lookup_is_not_found(self, project_id):
        other = await ProjectService.create_project("Other")
        task = await TaskService.create_task(project_id, TaskCreate(title="secret"))

        with pytest.raises(TaskNotFound):
            await TaskService.get_task(str(other.id), str(task.id))

    @pytest.mark.asyncio
    async def test_unknown_task(self, project_id):
        with pytest.raises(TaskNotFound):
            await TaskService.get_task(project_id, str(uuid.uuid4()))


class TestListTasks:
    @pytest.mark.asyncio
    async def test_pagination(self, project_id, clock):
        t1, t2, t3 = await make_tasks(project_id, clock, "T1", "T2", "T3")

        async def page(**params):
            tasks = await TaskService.list_tasks(project_id, TaskListParams(**params))
            return [t.id for t in tasks]

        assert await page(limit=2) == [t3.id, t2.id]
        assert await page(limit=2, offset=1) == [t2.id, t1.id]
        assert await page(offset=2) == [t1.id]
        assert await page() == [t3.id, t2.id, t1.id]

    @pytest.mark.asyncio
    async def test_limit_and_offset_are_normalised(self, project_id, clock):
        t1, t2, t3 = await make_tasks(project_id, clock, "T1", "T2", "T3")

        assert len(await TaskService.list_tasks(project_id, TaskListParams(limit=0))) == 3
        assert len(await TaskService.list_tasks(project_id, TaskListParams(limit=-5))) == 1
        assert len(await TaskService.list_tasks(project_id, TaskListParams(offset=-1))) == 3

    @pytest.mark.asyncio
    async def test_equal_timestamps_break_ties_by_id(self, project_id, clock):
        moment = clock()
        tasks = [
            await TaskService.create_task(project_id, TaskCreate(title=f"T{i}"), now=moment)
            for i in range(4)
        ]

        listed = await TaskService.list_tasks(project_id)

        assert [t.id for t in listed] == sorted((t.id for t in tasks), key=str)

    @pytest.mark.asyncio
    async def test_search_by_title(self, project_id, clock):
        t1, _, _ = await make_tasks(project_id, clock, "T1", "T2", "T3")

        found = await TaskService.list_tasks(project_id, TaskListParams(q="T1"))
        assert [t.id for t in found] == [t1.id]

        assert await TaskService.list_tasks(project_id, TaskListParams(q="NoMatch")) == []

    @pytest.mark.asyncio
    async def test_blank_search_is_ignored(self, project_id, clock):
        await make_tasks(project_id, clock, "T1", "T2")
        assert len(await TaskService.list_tasks(project_id, TaskListParams(q="   "))) == 2

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, project_id, clock):
        await make_tasks(project_id, clock, "100% done", "1000 done")

        found = await TaskService.list_tasks(project_id, TaskListParams(q="100%"))
        assert [t.title for t in found] == ["100% done"]

    @pytest.mark.asyncio
    async def test_status_filter_composes_with_search(self, project_id, clock):
        await TaskService.create_task(project_id, TaskCreate(title="deploy api", status="DONE"), now=clock())
        await TaskService.create_task(project_id, TaskCreate(title="deploy web"), now=clock())
        await TaskService.create_task(project_id, TaskCreate(title="docs", status="DONE"), now=clock())

        found = await TaskService.list_tasks(project_id, TaskListParams(status="done", q="deploy"))

        assert [t.title for t in found] == ["deploy api"]

    @pytest.mark.asyncio
    async def test_invalid_status_fails_whole_call(self, project_id, clock):
        await make_tasks(project_id, clock, "T1")
        with pytest.raises(InvalidStatus):
            await TaskService.list_tasks(project_id, TaskListParams(status="PENDING"))

    @pytest.mark.asyncio
    async def test_only_tasks_of_the_project(self, project_id, clock):
        other = await ProjectService.create_project("Other")
        await TaskService.create_task(str(other.id), TaskCreate(title="elsewhere"), now=clock())
        mine = await TaskService.create_task(project_id, TaskCreate(title="mine"), now=clock())

        assert [t.id for t in await TaskService.list_tasks(project_id)] == [mine.id]

    @pytest.mark.asyncio
    async def test_unknown_project(self, database):
        with pytest.raises(ProjectNotFound):
            await TaskService.list_tasks(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_offset_beyond_sqlite_range_is_an_empty_page(self, project_id, clock):
        await make_tasks(project_id, clock, "T1", "T2")

        assert await TaskService.list_tasks(project_id, TaskListParams(offset=10**20)) == []


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_partial_update(self, project_id, clock):
        task = await TaskService.create_task(
            project_id, TaskCreate(title="T2", description="keep me"), now=clock()
        )
        later = clock()

        updated = await TaskService.update_task(
            project_id, str(task.id), TaskUpdate(status="in_progress"), now=later
        )

        assert updated.status is TaskStatus.IN_PROGRESS
        assert updated.title == "T2"
        assert updated.description == "keep me"
        assert updated.created_at == task.created_at
        assert updated.updated_at == later

    @pytest.mark.asyncio
    async def test_update_all_fields(self, project_id, clock):
        task = await TaskService.create_task(project_id, TaskCreate(title="T2"), now=clock())

        updated = await TaskService.update_task(
            project_id,
            str(task.id),
            TaskUpdate(title=" T2-updated ", status="IN_PROGRESS", description="Hello"),
            now=clock(),
        )

        assert (updated.title, updated.status, updated.description) == (
            "T2-updated",
            TaskStatus.IN_PROGRESS,
            "Hello",
        )
        assert await TaskService.get_task(project_id, str(task.id)) == updated

    @pytest.mark.asyncio
    async def test_empty_description_clears_it(self, project_id, clock):
        task = await TaskService.create_task(project_id, TaskCreate(title="T", description="old"), now=clock())

        updated = await TaskService.update_task(project_id, str(task.id), TaskUpdate(description=""), now=clock())

        assert updated.description is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("patch", [None, TaskUpdate(), TaskUpdate(title=None, status=None)])
    async def test_empty_patch_is_a_read(self, project_id, clock, patch):
        task = await TaskService.create_task(project_id, TaskCreate(title="T"), now=clock())

        result = await TaskService.update_task(project_id, str(task.id), patch, now=clock())

        assert result == task
        assert result.updated_at == task.updated_at

    @pytest.mark.asyncio
    async def test_moving_updates_to_top_of_list(self, project_id, clock):
        t1, t2 = await make_tasks(project_id, clock, "T1", "T2")

        await TaskService.update_task(project_id, str(t1.id), TaskUpdate(status="DONE"), now=clock())

        assert [t.id for t in await TaskService.list_tasks(project_id)] == [t1.id, t2.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "patch, error",
        [
            (TaskUpdate(title="x" * 205, status="IN_PROGRESS"), TitleTooLong),
            (TaskUpdate(title="   "), EmptyTitle),
            (TaskUpdate(status="later"), InvalidStatus),
        ],
    )
    async def test_invalid_patch_changes_nothing(self, project_id, clock, patch, error):
        task = await TaskService.create_task(project_id, TaskCreate(title="T"), now=clock())

        with pytest.raises(error):
            await TaskService.update_task(project_id, str(task.id), patch)

        assert await TaskService.get_task(project_id, str(task.id)) == task

    @pytest.mark.asyncio
    async def test_wrong_project_is_task_not_found(self, project_id, clock):
        other = await ProjectService.create_project("Other")
        task = await TaskService.create_task(project_id, TaskCreate(title="T"), now=clock())

        with pytest.raises(TaskNotFound):
            await TaskService.update_task(str(other.id), str(task.id), TaskUpdate(title="stolen"))

        assert (await TaskService.get_task(project_id, str(task.id))).title == "T"

    @pytest.mark.asyncio
    async def test_unknown_project(self, project_id, clock):
        task = await TaskService.create_task(project_id, TaskCreate(title="T"), now=clock())

        with pytest.raises(ProjectNotFound):
            await TaskService.update_task(str(uuid.uuid4()), str(task.id), TaskUpdate(title="x"))

    @pytest.mark.asyncio
    async def test_unknown_task(self, project_id):
        with pytest.raises(TaskNotFound):
            await TaskService.update_task(project_id, str(uuid.uuid4()), TaskUpdate(title="x"))


class TestDeleteTask:
    @pytest.mark.asyncio
    async def test_delete_twice(self, project_id):
        task = await TaskService.create_task(project_id, TaskCreate(title="T"))

        await TaskService.delete_task(project_id, str(task.id))
        with pytest.raises(TaskNotFound):
            await TaskService.delete_task(project_id, str(task.id))
        with pytest.raises(TaskNotFound):
            await TaskService.get_task(project_id, str(task.id))

    @pytest.mark.asyncio
    async def test_wrong_project_keeps_task(self, project_id):
        other = await ProjectService.create_project("Other")
        task = await TaskService.create_task(project_id, TaskCreate(title="T"))

        with pytest.raises(TaskNotFound):
            await TaskService.delete_task(str(other.id), str(task.id))
        assert await TaskService.get_task(project_id, str(task.id)) == task

    @pytest.mark.asyncio
    async def test_unknown_project(self, database):
        with pytest.raises(ProjectNotFound):
            await TaskService.delete_task(str(uuid.uuid4()), str(uuid.uuid4()))
