import pytest

from vectorwire.mcp_server import TOOLS, _dispatch_tool


def test_tool_names():
    assert [t.name for t in TOOLS] == ["encode", "decode", "distance_sql", "batch"]


async def test_encode_and_decode():
    encoded = await _dispatch_tool("encode", {"type_name": "halfvec", "text": "[1,2,3]"})
    assert encoded == {"type_name": "halfvec", "hex": "000300003c0040004200"}
    decoded = await _dispatch_tool("decode", {"type_name": "halfvec", "hex": encoded["hex"]})
    assert decoded == {"type_name": "halfvec", "text": "[1,2,3]", "length": 3}


async def test_distance_sql():
    result = await _dispatch_tool(
        "distance_sql",
        {"distance": "hamming", "column": "codes", "type_name": "bit", "text": "1010"},
    )
    assert result == {"sql": '"codes" <~> $1', "params": ["1010"]}


async def test_missing_argument():
    with pytest.raises(ValueError, match="Missing required argument 'text'"):
        await _dispatch_tool("encode", {"type_name": "vector"})


async def test_batch_continue_on_error():
    results = await _dispatch_tool(
        "batch",
        {
            "operations": [
                {"name": "decode", "arguments": {"type_name": "vector", "hex": "000100013f800000"}},
                {"name": "encode", "arguments": {"type_name": "bit", "text": "1"}},
            ],
            "continue_on_error": True,
        },
    )
    assert "reserved" in results[0]["error"]
    assert results[1] == {"name": "encode", "result": {"type_name": "bit", "hex": "0000000180"}}


async def test_unknown_tool():
    with pytest.raises(ValueError):
        await _dispatch_tool("vector_add", {})
