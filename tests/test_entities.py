import pytest

from wormbase_gateway.catalogue import EntityType
from wormbase_gateway.utils.http import UpstreamError

OVERVIEW = {"fields": {"name": {"data": {"id": "WBGene00000898", "label": "daf-2", "class": "gene"}}}}


async def test_widget_failure_becomes_marker(client, upstream):
    upstream.widget("gene", "X", "overview", OVERVIEW)
    upstream.widget("gene", "X", "phenotype", status=500)

    record = await client.get_entity("gene", "X", ["overview", "phenotype"])

    assert record == {
        "id": "X",
        "type": "gene",
        "overview": {"name": {"id": "WBGene00000898", "label": "daf-2", "class": "gene"}},
        "phenotype": {"error": "Failed to fetch phenotype"},
    }


async def test_get_entity_defaults_to_overview(client, upstream):
    upstream.widget("disease", "DOID1", "overview", {"fields": {"name": {"data": "x"}}})

    record = await client.get_entity(EntityType.DISEASE, "DOID1")

    assert record == {"id": "DOID1", "type": "disease", "overview": {"name": "x"}}


async def test_duplicate_widgets_fetched_once(client, upstream):
    await client.get_entity("strain", "N2", ["overview", "overview"])

    assert upstream.paths == ["/rest/widget/strain/N2/overview"]


async def test_get_gene_default_widgets(client, upstream):
    record = await client.get_gene("WBGene00000898")

    assert record["id"] == "WBGene00000898"
    assert record["query"] == "WBGene00000898"
    assert record["type"] == "gene"
    assert set(record) - {"id", "query", "type"} == {"overview", "phenotype", "expression", "ontology"}
    assert not upstream.searched()


async def test_get_gene_resolves_names(client, upstream):
    upstream.add("/search/gene/daf-2", {"results": [{"id": "WBGene00000898", "label": "daf-2", "class": "gene"}]})
    upstream.widget("gene", "WBGene00000898", "overview", OVERVIEW)

    record = await client.get_gene("daf-2", ["overview"])

    assert record["id"] == "WBGene00000898"
    assert record["query"] == "daf-2"
    assert record["overview"]["name"]["label"] == "daf-2"
    assert "/rest/widget/gene/WBGene00000898/overview" in upstream.paths


async def test_get_gene_keeps_unresolved_name(client, upstream):
    upstream.fail("/search/gene/not-a-gene")

    record = await client.get_gene("not-a-gene", ["overview"])

    assert record["id"] == "not-a-gene"
    assert record["overview"] == {"error": "Failed to fetch overview"}


INTERACTIONS = {
    "fields": {
        "physical": {"data": [{"id": "WBInteraction1", "label": "daf-2 : daf-16", "class": "interaction"}]},
        "genetic": {"data": [], "description": "genetic interactions"},
    }
}


async def test_interactions_projection(client, upstream):
    upstream.widget("gene", "WBGene00000898", "interactions", INTERACTIONS)

    physical = await client.get_interactions("WBGene00000898", "physical")
    genetic = await client.get_interactions("WBGene00000898", "genetic")
    regulatory = await client.get_interactions("WBGene00000898", "regulatory")
    everything = await client.get_interactions("WBGene00000898")

    assert physical == {"physical": [{"id": "WBInteraction1", "label": "daf-2 : daf-16", "class": "interaction"}]}
    assert genetic == {"genetic": []}
    assert regulatory == {}
    assert set(everything) == {"physical", "genetic"}


async def test_single_widget_errors_propagate(client, upstream):
    upstream.widget("gene", "WBGene00000898", "expression", status=503)

    with pytest.raises(UpstreamError) as exc:
        await client.get_expression("WBGene00000898")

    assert exc.value.status_code == 503


async def test_ontology_is_normalized(client, upstream):
    upstream.widget("gene", "WBGene00000898", "ontology", {"fields": {"go": {"data": {"Biological_process": []}}}})

    assert await client.get_ontology("WBGene00000898") == {"go": {"Biological_process": []}}


async def test_get_field_unwraps_named_field(client, upstream):
    upstream.add("/rest/field/gene/WBGene00000898/concise_description", {"concise_description": {"data": {"text": "x"}}})
    upstream.add("/rest/field/gene/WBGene00000898/remarks", {"other": 1})

    assert await client.get_field("gene", "WBGene00000898", "concise_description") == {"data": {"text": "x"}}
    assert await client.get_field("gene", "WBGene00000898", "remarks") == {"other": 1}


async def test_empty_body_is_upstream_error(client, upstream):
    upstream.widget("gene", "WBGene1", "expression")

    with pytest.raises(UpstreamError, match="Invalid JSON"):
        await client.get_expression("WBGene1")


async def test_unrequestable_widget_name_becomes_marker(client, upstream):
    upstream.widget("gene", "X", "overview", OVERVIEW)

    record = await client.get_entity("gene", "X", ["overview", "bad\nname"])

    assert record["overview"] == {"name": {"id": "WBGene00000898", "label": "daf-2", "class": "gene"}}
    assert record["bad\nname"] == {"error": "Failed to fetch bad\nname"}


async def test_empty_widget_list_fetches_nothing(client, upstream):
    assert await client.get_entity("gene", "X", []) == {"id": "X", "type": "gene"}
    assert await client.get_gene("WBGene00000898", []) == {"id": "WBGene00000898", "query": "WBGene00000898", "type": "gene"}
    assert upstream.requests == []


async def test_get_gene_prefers_exact_label_match(client, upstream):
    upstream.add(
        "/search/gene/daf-2",
        {
            "results": [
                {"id": "WBGene00000915", "label": "daf-28", "class": "gene"},
                {"id": "WBGene00000898", "label": "DAF-2", "class": "gene"},
            ]
        },
    )

    record = await client.get_gene("daf-2", ["overview"])

    assert record["id"] == "WBGene00000898"


async def test_get_gene_without_label_match_takes_top_gene(client, upstream):
    upstream.add(
        "/search/gene/Y55D5A.5",
        {"results": [{"id": "WBVar00000001", "label": "x"}, {"id": "WBGene00000898", "label": "daf-2"}]},
    )

    assert await client.resolve_gene_id("Y55D5A.5") == "WBGene00000898"
