"""Tests for background pose image generation."""

import asyncio

import pytest

from zenflow.services.enrichment import ImageEnricher

from .conftest import make_pose, wait_until


def replace_with(canvas, poses):
    items = [canvas.make_item(pose) for pose in poses]
    return canvas.replace_all(items, "Flow", "Generated")


class TestImageEnricher:
    """Tests for ImageEnricher."""

    @pytest.mark.asyncio
    async def test_only_missing_images_requested(self, canvas, fake_client):
        """Scenario: one catalog image and two missing gives two requests."""
        snapshot = replace_with(canvas, [
            make_pose("known", image_url="https://example.com/known.jpg"),
            make_pose("lizard", "Lizard Lunge"),
            make_pose("eagle", "Eagle Arms", image_prompt="eagle arms illustration"),
        ])
        enricher = ImageEnricher(fake_client, canvas)

        report = await enricher.enrich(snapshot.items)

        assert sorted(fake_client.image_prompts) == ["Lizard Lunge", "eagle arms illustration"]
        assert report.requested == 2
        assert report.succeeded == 2
        result = canvas.snapshot()
        assert result.items[0].image_url == "https://example.com/known.jpg"
        assert result.items[1].image_url == "data:image/png;base64,Lizard Lunge"
        assert result.items[2].image_url == "data:image/png;base64,eagle arms illustration"
        assert not any(item.image_loading for item in result.items)

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, canvas, fake_client):
        """Scenario: one failed request marks only its own item."""
        snapshot = replace_with(canvas, [
            make_pose("known", image_url="https://example.com/known.jpg"),
            make_pose("lizard", "Lizard Lunge"),
            make_pose("eagle", "Eagle Arms"),
        ])
        fake_client.image_failures.add("Lizard Lunge")
        enricher = ImageEnricher(fake_client, canvas)

        report = await enricher.enrich(snapshot.items)

        assert report.requested == 2
        assert report.failed == 1
        assert report.succeeded == 1
        known, lizard, eagle = canvas.snapshot().items
        assert known.image_url and not known.image_error
        assert lizard.image_error and not lizard.image_loading and lizard.image_url is None
        assert eagle.image_url == "data:image/png;base64,Eagle Arms"
        assert not eagle.image_error

    @pytest.mark.asyncio
    async def test_response_after_removal_is_discarded(self, canvas, fake_client):
        snapshot = replace_with(canvas, [make_pose("a", "Alpha"), make_pose("b", "Beta")])
        fake_client.image_gates["Alpha"] = asyncio.Event()
        enricher = ImageEnricher(fake_client, canvas)
        enricher.schedule(snapshot.items)

        alpha_id = snapshot.items[0].canvas_id
        await wait_until(lambda: "Alpha" in fake_client.image_prompts)
        canvas.remove(alpha_id)
        fake_client.image_gates["Alpha"].set()

        report = await enricher.wait()

        assert report.discarded == 1
        assert report.succeeded == 1
        assert alpha_id not in canvas
        assert [item.pose.id for item in canvas.snapshot().items] == ["b"]

    @pytest.mark.asyncio
    async def test_failure_after_removal_is_discarded(self, canvas, fake_client):
        snapshot = replace_with(canvas, [make_pose("a", "Alpha")])
        fake_client.image_gates["Alpha"] = asyncio.Event()
        fake_client.image_failures.add("Alpha")
        enricher = ImageEnricher(fake_client, canvas)
        enricher.schedule(snapshot.items)

        await wait_until(lambda: fake_client.image_prompts)
        canvas.remove(snapshot.items[0].canvas_id)
        fake_client.image_gates["Alpha"].set()

        report = await enricher.wait()

        assert report.discarded == 1
        assert report.failed == 0
        assert canvas.snapshot().is_empty

    @pytest.mark.asyncio
    async def test_updates_target_ids_after_reorder(self, canvas, fake_client):
        snapshot = replace_with(canvas, [make_pose("a", "Alpha"), make_pose("b", "Beta")])
        for prompt in ("Alpha", "Beta"):
            fake_client.image_gates[prompt] = asyncio.Event()
        enricher = ImageEnricher(fake_client, canvas)
        enricher.schedule(snapshot.items)

        alpha_id, beta_id = snapshot.canvas_ids
        await wait_until(lambda: len(fake_client.image_prompts) == 2)
        canvas.reorder(beta_id, alpha_id)

        # resolve in reverse order
        fake_client.image_gates["Beta"].set()
        await wait_until(lambda: canvas.get(beta_id).image_url is not None)
        fake_client.image_gates["Alpha"].set()
        await enricher.wait()

        first, second = canvas.snapshot().items
        assert first.canvas_id == beta_id
        assert first.image_url == "data:image/png;base64,Beta"
        assert second.canvas_id == alpha_id
        assert second.image_url == "data:image/png;base64,Alpha"

    @pytest.mark.asyncio
    async def test_stale_batch_after_new_replace(self, canvas, fake_client):
        """Responses from a replaced flow never land in the new one."""
        old = replace_with(canvas, [make_pose("a", "Alpha")])
        fake_client.image_gates["Alpha"] = asyncio.Event()
        enricher = ImageEnricher(fake_client, canvas)
        enricher.schedule(old.items)
        await wait_until(lambda: fake_client.image_prompts)

        new = replace_with(canvas, [make_pose("z", "Zeta", image_url="https://example.com/z.jpg")])
        fake_client.image_gates["Alpha"].set()
        report = await enricher.wait()

        assert report.discarded == 1
        assert canvas.snapshot().items == new.items

    @pytest.mark.asyncio
    async def test_nothing_to_do(self, canvas, fake_client):
        snapshot = replace_with(canvas, [make_pose("a", image_url="u")])
        enricher = ImageEnricher(fake_client, canvas)

        assert enricher.schedule(snapshot.items) == []
        assert enricher.pending == 0
        report = await enricher.wait()
        assert report.requested == 0
        assert fake_client.image_prompts == []
