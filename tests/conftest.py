import sys
from pathlib import Path

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from rulebook.embeddings.base import IEmbeddingProvider  # noqa: E402
from rulebook.errors import EmbeddingProviderError  # noqa: E402
from rulebook.index.memory import MemoryVectorIndex  # noqa: E402
from rulebook.service import RulebookContext, RulesService  # noqa: E402
from rulebook.settings import Settings  # noqa: E402


VOCABULARY = (
    "typing",
    "strict",
    "security",
    "vulnerabilities",
    "testing",
    "python",
    "react",
    "docs",
)


class KeywordEmbedder(IEmbeddingProvider):
    """One dimension per vocabulary word; texts containing `explode` fail."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    @property
    def model(self) -> str:
        return "keyword-test"

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        lowered = text.lower()
        if "explode" in lowered:
            raise EmbeddingProviderError("embedding backend unavailable")
        return [float(lowered.count(word)) for word in VOCABULARY]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_text():
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def rules_root(tmp_path: Path) -> Path:
    return tmp_path / "project"


@pytest.fixture
def settings(tmp_path: Path, rules_root: Path) -> Settings:
    return Settings(
        _env_file=None,
        EMBEDDING_PROVIDER="hash",
        RULES_DIR=rules_root,
        RULES_INDEX_BACKEND="memory",
        RULES_DB_PATH=tmp_path / "rules.db",
        RULES_INDEX_DIMENSION=len(VOCABULARY),
        EMBEDDING_CONCURRENCY=2,
    )


@pytest.fixture
def embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def context(settings: Settings, embedder: KeywordEmbedder) -> RulebookContext:
    rulebook_context = RulebookContext(
        settings=settings, embedder=embedder, index=MemoryVectorIndex()
    )
    rulebook_context.initialize()
    return rulebook_context


@pytest.fixture
def service(context: RulebookContext) -> RulesService:
    return RulesService(context)


@pytest.fixture
def sample_tree(rules_root: Path, write_text) -> Path:
    write_text(
        rules_root / ".cursor" / "rules" / "typing.mdc",
        "---\n"
        'description: "Use strict typing"\n'
        "globs: [**/*.ts]\n"
        "---\n"
        "Prefer explicit types. Avoid any.\n",
    )
    write_text(
        rules_root / ".github" / "copilot-instructions.md",
        "# Security Review\n"
        "\n"
        "Review every change for security vulnerabilities.\n",
    )
    return rules_root


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_context(monkeypatch, settings: Settings, context: RulebookContext) -> RulebookContext:
    monkeypatch.setattr("rulebook.__main__.load_settings", lambda: settings)
    monkeypatch.setattr("rulebook.__main__._build_context", lambda _settings: context)
    return context
