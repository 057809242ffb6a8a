import os
import sqlite3
from datetime import datetime

import pytest
from pydantic import ValidationError as ModelValidationError

from todo_web.errors import StorageError
from todo_web.models import Todo
from todo_web.store import MEMORY, TodoStore, initialize


def new_store(*titles):
    store = TodoStore.initialize(MEMORY)
    for title in titles:
        store.create(title)
    return store


def titles(store):
    return [t.title for t in store.list()]


class TestInitialize:
    def test_initialize_memory_creates_table(self):
        store = initialize(MEMORY)
        store.create("test")
        assert len(store.list()) == 1

    def test_initialize_creates_missing_directory(self, tmp_path):
        path = os.path.join(str(tmp_path), "nested", "dir", "todos.db")
        store = TodoStore.initialize(path)
        store.create("persisted")
        store.close()
        assert os.path.exists(path)

    def test_initialize_is_idempotent(self, tmp_path):
        path = os.path.join(str(tmp_path), "todos.db")
        first = TodoStore.initialize(path)
        first.create("Keep me")
        first.close()

        second = TodoStore.initialize(path)
        assert titles(second) == ["Keep me"]
        second.close()

    def test_initialize_fails_when_path_is_a_directory(self, tmp_path):
        with pytest.raises(StorageError) as excinfo:
            TodoStore.initialize(str(tmp_path))
        assert "opening database" in str(excinfo.value) or "creating table" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, (OSError, sqlite3.Error))


class TestCrud:
    def test_list_empty(self):
        assert new_store().list() == []

    def test_create_defaults(self):
        store = new_store("Buy groceries")
        todos = store.list()
        assert len(todos) == 1
        todo = todos[0]
        assert isinstance(todo, Todo)
        assert todo.id == 1
        assert todo.title == "Buy groceries"
        assert todo.completed is False
        assert isinstance(todo.created_at, datetime)

    def test_toggle_twice_restores_flag(self):
        store = new_store("Test toggle")
        store.toggle(1)
        assert store.list()[0].completed is True
        store.toggle(1)
        assert store.list()[0].completed is False

    def test_toggle_only_touches_matching_row(self):
        store = new_store("a", "b")
        store.toggle(2)
        assert [t.completed for t in store.list()] == [False, True]

    def test_delete_removes_exactly_one(self):
        store = new_store("a", "b", "c")
        store.delete(1)
        assert len(store.list()) == 2

    def test_delete_middle_preserves_order(self):
        store = new_store("First", "Second", "Third")
        store.delete(2)
        assert titles(store) == ["First", "Third"]

    def test_unknown_id_is_noop(self):
        store = new_store("only")
        store.toggle(999)
        store.delete(999)
        todos = store.list()
        assert len(todos) == 1
        assert todos[0].completed is False

    def test_ids_are_not_reused(self):
        store = new_store("a", "b")
        store.delete(2)
        store.create("c")
        assert [t.id for t in store.list()] == [1, 3]

    def test_list_orders_by_id(self):
        store = new_store("z", "y", "x")
        assert [t.id for t in store.list()] == [1, 2, 3]
        assert titles(store) == ["z", "y", "x"]


class TestFailures:
    def test_title_longer_than_column_is_storage_error(self):
        store = new_store()
        with pytest.raises(StorageError):
            store.create("x" * 501)
        assert store.list() == []

    def test_title_at_column_width_is_accepted(self):
        store = new_store("x" * 500)
        assert len(store.list()[0].title) == 500

    def test_closed_store_raises_storage_error(self):
        store = new_store("a")
        store.close()
        with pytest.raises(StorageError):
            store.list()
        with pytest.raises(StorageError):
            store.create("b")


class TestTodoRecord:
    def test_todo_is_immutable(self):
        todo = new_store("frozen").list()[0]
        with pytest.raises(ModelValidationError):
            todo.completed = True
