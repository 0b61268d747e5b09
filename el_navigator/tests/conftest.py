from __future__ import annotations

import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from loguru import logger

from el_navigator.config import AppConfig
from el_navigator.models import TextDocument, WorkspaceFolders
from el_navigator.services.assistant import ExpressionAssistant

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

JAVA_ROOT = "src/main/java"

USER_BEAN = """package com.acme.web;

import java.util.List;
import javax.inject.Named;
import com.acme.model.Address;

@Named
public class UserBean {
    public List<Address> addresses;
    private String name;

    public UserBean() {
    }

    public String getName() {
        return name;
    }

    public void setName(String name) {
        this.name = name;
    }

    public boolean isActive() {
        return true;
    }

    public Address getPrimaryAddress() {
        return addresses.get(0);
    }

    public String save(String reason) {
        return "ok";
    }

    @Override
    public String toString() {
        return name;
    }
}
"""

ADDRESS = """package com.acme.model;

public class Address {
    private String city;
    public Country country;

    public String getCity() {
        return city;
    }

    public String getStreet() {
        return "";
    }
}
"""

COUNTRY = """package com.acme.model;

public class Country {
    public String getCode() {
        return "";
    }
}
"""

ORDER_BEAN = """package com.acme.web;

import javax.faces.bean.ManagedBean;

@ManagedBean(name = "orders")
public class OrderBean {
    public Address[] getShippingAddresses() {
        return null;
    }
}
"""

HELPER = """package com.acme.util;

public class Helper {
    public String getValue() {
        return "";
    }
}
"""


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _silence_logger() -> Generator[None, None, None]:
    logger.remove()
    yield


@pytest.fixture
def temp_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "workspace"
    repo.mkdir()
    return repo


@pytest.fixture
def write_java(temp_repo: Path) -> Callable[[str, str], Path]:
    def _write(relative: str, content: str) -> Path:
        path = temp_repo / JAVA_ROOT / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def java_workspace(temp_repo: Path, write_java: Callable[[str, str], Path]) -> Path:
    write_java("com/acme/web/UserBean.java", USER_BEAN)
    write_java("com/acme/web/OrderBean.java", ORDER_BEAN)
    write_java("com/acme/model/Address.java", ADDRESS)
    write_java("com/acme/model/Country.java", COUNTRY)
    write_java("com/acme/util/Helper.java", HELPER)
    return temp_repo


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        SOURCE_ROOT_RELATIVE=JAVA_ROOT,
        INDEX_CACHE_TTL_MS=10000,
        COMPLETION_ENABLED=True,
        HOVER_ENABLED=True,
    )


@pytest.fixture
def assistant(
    java_workspace: Path, config: AppConfig, clock: FakeClock
) -> ExpressionAssistant:
    return ExpressionAssistant(config, WorkspaceFolders([java_workspace]), clock=clock)


@pytest.fixture
def make_document(java_workspace: Path) -> Callable[..., TextDocument]:
    def _make(
        text: str, name: str = "page.xhtml", language_id: str = "html"
    ) -> TextDocument:
        path = java_workspace / "src" / "main" / "webapp" / name
        return TextDocument(text=text, path=path, language_id=language_id)

    return _make


def line_of(source: str, needle: str) -> int:
    for number, line in enumerate(source.splitlines(), start=1):
        if needle in line:
            return number
    raise AssertionError(f"{needle!r} not found")
