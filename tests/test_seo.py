import asyncio

from spa_capture.seo import SEO_FIELDS, build_seo_report, validate_seo

FULL_HEAD = """
<html><head>
  <title>Love to Hug</title>
  <meta name="description" content="Hugs for everyone">
  <link rel="canonical" href="https://example.com/">
  <meta property="og:title" content="Love to Hug">
  <meta property="og:description" content="Hugs for everyone">
  <meta property="og:image" content="https://example.com/og.png">
  <meta property="og:url" content="https://example.com/">
  <meta name="twitter:card" content="summary_large_image">
  <script type="application/ld+json">{"@type": "WebSite"}</script>
</head><body><h1>  Welcome home  </h1><h1>Second</h1></body></html>
"""


def test_validate_seo_reads_all_fields(make_session):
    report = asyncio.run(validate_seo(make_session(FULL_HEAD)))

    assert report.passed == 10
    assert report.warned == 0
    assert report.total == 10
    assert report.fields["title"] == "Love to Hug"
    assert report.fields["twitter_card"] == "summary_large_image"
    assert report.fields["json_ld"] == "present"
    assert report.fields["h1"] == "Welcome home"


def test_validate_seo_is_pure(make_session):
    session = make_session(FULL_HEAD)
    before = str(session.soup)
    first = asyncio.run(validate_seo(session))
    second = asyncio.run(validate_seo(session))
    assert first == second
    assert str(session.soup) == before


def test_validate_seo_empty_document_warns_on_everything(make_session, caplog):
    with caplog.at_level("WARNING", logger="spa_capture"):
        report = asyncio.run(validate_seo(make_session("<html><body></body></html>")))
    assert report.passed == 0
    assert report.warned == 10
    assert report.missing == [name for name, _ in SEO_FIELDS]
    assert "og:image: MISSING" in caplog.text


def test_build_seo_report_treats_whitespace_as_missing():
    report = build_seo_report({"title": "   ", "description": "\n", "canonical": "/"})
    assert report.fields["title"] is None
    assert report.fields["description"] is None
    assert report.fields["canonical"] == "/"
    assert report.passed == 1


def test_build_seo_report_truncates_h1():
    report = build_seo_report({"h1": "x" * 200}, max_h1_chars=80)
    assert report.fields["h1"] == "x" * 80
