"""Unit tests for the OllamaClient wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from clippy_server.ollama import ChatResult, OllamaClient


def stream_of(*chunks):
    """Build a side effect returning a fresh async stream of the given chunks."""

    def _side_effect(**kwargs):
        async def _gen():
            for chunk in chunks:
                yield chunk

        return _gen()

    return _side_effect


@pytest.fixture
def mock_ollama_async_client():
    """Create a mock ollama.AsyncClient."""
    with patch("clippy_server.ollama.client.ollama.AsyncClient") as mock_class:
        mock_instance = AsyncMock()
        mock_class.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def ollama_client(mock_ollama_async_client):
    """Create an OllamaClient with mocked AsyncClient."""
    return OllamaClient(host="http://localhost:11434")


@pytest.mark.asyncio
async def test_client_initialization():
    """Test that OllamaClient initializes correctly."""
    with patch("clippy_server.ollama.client.ollama.AsyncClient") as mock_class:
        client = OllamaClient(host="http://test:11434", timeout=30.0)
        assert client.host == "http://test:11434"
        mock_class.assert_called_once_with(host="http://test:11434", timeout=30.0)


@pytest.mark.asyncio
async def test_check_connection_success(ollama_client, mock_ollama_async_client):
    """Test successful connection check."""
    mock_ollama_async_client.list.return_value = {"models": []}

    result = await ollama_client.check_connection()

    assert result is True
    mock_ollama_async_client.list.assert_called_once()


@pytest.mark.asyncio
async def test_check_connection_failure(ollama_client, mock_ollama_async_client):
    """Test connection check when Ollama is unreachable."""
    mock_ollama_async_client.list.side_effect = Exception("Connection refused")

    result = await ollama_client.check_connection()

    assert result is False


@pytest.mark.asyncio
async def test_chat_collects_streamed_content(ollama_client, mock_ollama_async_client):
    """Test that content chunks are concatenated into one result."""
    mock_ollama_async_client.chat.side_effect = stream_of(
        {"message": {"role": "assistant", "content": "Hello"}, "done": False},
        {"message": {"role": "assistant", "content": ", world"}, "done": False},
        {
            "message": {"role": "assistant", "content": ""},
            "done": True,
            "eval_count": 12,
            "prompt_eval_count": 40,
        },
    )

    result = await ollama_client.chat(
        model="llama3.1:8b", messages=[{"role": "user", "content": "Hi"}]
    )

    assert isinstance(result, ChatResult)
    assert result.content == "Hello, world"
    assert result.done is True
    assert result.tool_calls == []
    assert result.eval_count == 12
    assert result.prompt_eval_count == 40

    kwargs = mock_ollama_async_client.chat.call_args.kwargs
    assert kwargs["model"] == "llama3.1:8b"
    assert kwargs["stream"] is True
    assert kwargs["tools"] is None


@pytest.mark.asyncio
async def test_chat_accumulates_tool_calls(ollama_client, mock_ollama_async_client):
    """Test that tool calls from any chunk are kept in arrival order."""
    first = {"function": {"name": "get_today_date", "arguments": {}}}
    second = {"function": {"name": "calculate", "arguments": {"expression": "2+2"}}}
    mock_ollama_async_client.chat.side_effect = stream_of(
        {"message": {"role": "assistant", "content": "", "tool_calls": [first]}},
        {"message": {"role": "assistant", "content": "", "tool_calls": [second]}},
        {"message": {"role": "assistant", "content": ""}, "done": True},
    )
    tools = [{"type": "function", "function": {"name": "calculate"}}]

    result = await ollama_client.chat(model="m", messages=[], tools=tools)

    assert result.tool_calls == [first, second]
    assert mock_ollama_async_client.chat.call_args.kwargs["tools"] == tools


@pytest.mark.asyncio
async def test_chat_accepts_model_chunks(ollama_client, mock_ollama_async_client):
    """Test that pydantic-style chunks are converted with model_dump."""
    chunk = MagicMock()
    chunk.model_dump.return_value = {
        "message": {"role": "assistant", "content": "ok"},
        "done": True,
    }
    mock_ollama_async_client.chat.side_effect = stream_of(chunk)

    result = await ollama_client.chat(model="m", messages=[])

    assert result.content == "ok"
    assert result.done is True


@pytest.mark.asyncio
async def test_chat_without_done_marker(ollama_client, mock_ollama_async_client):
    """Test that a truncated stream is reported as not done."""
    mock_ollama_async_client.chat.side_effect = stream_of(
        {"message": {"role": "assistant", "content": "partial"}, "done": False},
    )

    result = await ollama_client.chat(model="m", messages=[])

    assert result.done is False
    assert result.content == "partial"


@pytest.mark.asyncio
async def test_chat_api_error(ollama_client, mock_ollama_async_client):
    """Test that request failures propagate to the caller."""
    mock_ollama_async_client.chat.side_effect = Exception("model not found")

    with pytest.raises(Exception, match="model not found"):
        await ollama_client.chat(model="missing", messages=[])


@pytest.mark.asyncio
async def test_close(ollama_client):
    """Test that close completes without error."""
    await ollama_client.close()
