from wormbase_gateway.catalogue import EntityType

CWN1_OVERVIEW = {
    "fields": {
        "name": {"data": {"id": "WBGene00006763", "label": "cwn-1", "class": "gene", "taxonomy": "c_elegans"}},
        "concise_description": {"data": {"text": "cwn-1 encodes a Wnt ligand"}, "description": "summary"},
    }
}


async def test_identifier_resolves_without_search_service(client, upstream):
    upstream.widget("gene", "WBGene00006763", "overview", CWN1_OVERVIEW)

    response = await client.search("WBGene00006763")

    assert response.total == 1
    [hit] = response.results
    assert hit.id == "WBGene00006763"
    assert hit.label == "cwn-1"
    assert hit.class_ == "gene"
    assert hit.description == "cwn-1 encodes a Wnt ligand"
    assert not upstream.searched()


async def test_identifier_with_explicit_type_uses_that_type(client, upstream):
    upstream.widget("strain", "CB1370", "overview", {"fields": {"name": {"data": {"id": "CB1370", "label": "CB1370"}}}})

    response = await client.search("CB1370", EntityType.STRAIN)

    assert [r.class_ for r in response.results] == ["strain"]
    assert upstream.paths == ["/rest/widget/strain/CB1370/overview"]


async def test_failed_direct_lookup_falls_through_to_search(client, upstream):
    upstream.add("/search/all/WBGene00000001", {"results": [{"id": "WBGene00000001", "label": "aap-1", "class": "gene"}]})

    response = await client.search("WBGene00000001")

    assert [r.label for r in response.results] == ["aap-1"]
    assert upstream.paths[0] == "/rest/widget/gene/WBGene00000001/overview"
    assert upstream.searched()


async def test_search_error_falls_back_to_gene_lookup(client, upstream):
    upstream.fail("/search/all/daf-2")
    upstream.widget("gene", "daf-2", "overview", {"fields": {"name": {"data": {"id": "WBGene00000898", "label": "daf-2"}}}})

    response = await client.search("daf-2")

    assert response.total == 1
    [hit] = response.results
    assert hit.id == "daf-2"
    assert hit.label == "daf-2"
    assert hit.class_ == "gene"


async def test_fallback_walks_candidate_types_in_order(client, upstream):
    upstream.add("/search/all/e1370", status=500)
    upstream.widget("variation", "e1370", "overview", {"fields": {"name": {"data": {"id": "WBVar00143949", "label": "e1370"}}}})

    response = await client.search("e1370")

    assert [r.class_ for r in response.results] == ["variation"]
    assert upstream.paths == [
        "/search/all/e1370",
        "/rest/widget/gene/e1370/overview",
        "/rest/widget/protein/e1370/overview",
        "/rest/widget/variation/e1370/overview",
    ]


async def test_everything_failing_gives_empty_response(client, upstream):
    upstream.fail("/search/all/nonsense")

    response = await client.search("nonsense")

    assert response.model_dump(by_alias=True) == {"query": "nonsense", "results": [], "total": 0}


async def test_empty_search_uses_fallback(client, upstream):
    upstream.add("/search/all/unc-13", {"results": []})
    upstream.widget("gene", "unc-13", "overview", {"fields": {"name": {"data": {"id": "WBGene00006752", "label": "unc-13"}}}})

    response = await client.search("unc-13")

    assert [r.class_ for r in response.results] == ["gene"]


async def test_hits_parsed_from_alternate_keys(client, upstream):
    upstream.add(
        "/search/gene/insulin",
        {
            "hits": [
                {
                    "name": {"id": "WBGene00000898", "label": "daf-2"},
                    "type": "gene",
                    "species": "c_elegans",
                    "summary": "insulin/IGF receptor",
                },
                {"id": "WBGene00000912", "label": "daf-16", "class": "gene", "taxonomy": "c_elegans"},
                {"wbid": "WBGene00002084", "name": "ins-1", "category": "gene"},
            ],
            "total": 57,
        },
    )

    response = await client.search("insulin", "gene", limit=2)

    assert response.total == 57
    assert len(response.results) == 2
    first = response.results[0]
    assert (first.id, first.label, first.class_) == ("WBGene00000898", "daf-2", "gene")
    assert first.taxonomy == "c_elegans"
    assert first.description == "insulin/IGF receptor"


async def test_total_defaults_to_result_count(client, upstream):
    upstream.add("/search/all/lin", [{"wbid": "WBGene00002084", "name": "ins-1", "category": "gene"}])

    response = await client.search("lin")

    assert response.total == 1
    [hit] = response.results
    assert (hit.id, hit.label, hit.class_) == ("WBGene00002084", "ins-1", "gene")
    assert hit.model_dump(by_alias=True, exclude_none=True) == {"id": "WBGene00002084", "label": "ins-1", "class": "gene"}


async def test_surrounding_whitespace_is_ignored(client, upstream):
    upstream.widget("gene", "WBGene00006763", "overview", CWN1_OVERVIEW)

    response = await client.search("  WBGene00006763 ")

    assert response.query == "  WBGene00006763 "
    assert [r.id for r in response.results] == ["WBGene00006763"]
    assert not upstream.searched()
