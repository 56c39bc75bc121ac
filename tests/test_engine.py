# File: tests/test_engine.py
from __future__ import annotations

import pytest

from thumb_scout.engine import lookup_image
from thumb_scout.exceptions import ProtocolDisallowed
from thumb_scout.rules import json_rule, selector_rule


@pytest.mark.asyncio()
async def test_lookup_image_returns_extracted_url(lookup_config, test_site):
    extract = selector_rule(["meta[property='og:image']", "img.main"])
    result = await lookup_image(lookup_config, test_site("/post/1"), extract)

    assert result == "http://img/1.jpg"


@pytest.mark.asyncio()
async def test_lookup_image_json_api(lookup_config, test_site):
    result = await lookup_image(lookup_config, test_site("/api/gfy"), json_rule("gfyItem", "gifUrl"))

    assert result == "http://img/anim.gif"


@pytest.mark.asyncio()
async def test_lookup_image_http_error_is_none(lookup_config, test_site):
    result = await lookup_image(lookup_config, test_site("/missing"), selector_rule(["img"]))

    assert result is None


@pytest.mark.asyncio()
async def test_lookup_image_rejected_protocol(lookup_config):
    with pytest.raises(ProtocolDisallowed):
        await lookup_image(lookup_config, "ftp://example.com/post", selector_rule(["img"]))


@pytest.mark.asyncio()
async def test_lookup_image_with_shared_session(lookup_config, session, test_site):
    result = await lookup_image(lookup_config, test_site("/page"), selector_rule(["img"]), session=session)

    assert result == "http://img/x.jpg"
    assert not session.closed
