"""Shared fixtures: sample arXiv Atom responses."""

import pytest

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/"
      xmlns:arxiv="http://arxiv.org/schemas/atom">
  <link href="http://arxiv.org/api/query?search_query=all:RAG" rel="self" type="application/atom+xml"/>
  <title type="html">ArXiv Query: search_query=all:RAG&amp;id_list=&amp;start=0&amp;max_results=10</title>
  <id>http://arxiv.org/api/cHxbiOdZaP56ODnBPIenZhzg5f8</id>
  <updated>2024-03-01T00:00:00-05:00</updated>
  <opensearch:totalResults>2</opensearch:totalResults>
  <opensearch:startIndex>0</opensearch:startIndex>
  <opensearch:itemsPerPage>10</opensearch:itemsPerPage>
  <entry>
    <id>http://arxiv.org/abs/2402.16893v1</id>
    <updated>2024-02-26T18:54:18Z</updated>
    <published>2024-02-26T18:54:18Z</published>
    <title>The Good and The Bad: Exploring Privacy Issues in Retrieval-Augmented
  Generation (RAG)</title>
    <summary>Retrieval-augmented generation (RAG) is a powerful technique.</summary>
    <author>
      <name>Shenglai Zeng</name>
    </author>
    <author>
      <name>Jiankun Zhang</name>
      <arxiv:affiliation>Michigan State University</arxiv:affiliation>
    </author>
    <arxiv:doi>10.48550/arXiv.2402.16893</arxiv:doi>
    <arxiv:comment>Under review</arxiv:comment>
    <arxiv:journal_ref>ACL Findings 2024</arxiv:journal_ref>
    <link href="http://arxiv.org/abs/2402.16893v1" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2402.16893v1" rel="related" type="application/pdf"/>
    <arxiv:primary_category term="cs.CR" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.CR" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.CL" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2301.00001v2</id>
    <updated>2023-01-05T10:00:00Z</updated>
    <published>2023-01-01T09:30:00Z</published>
    <title>A Minimal Entry</title>
    <summary>No optional metadata here.</summary>
    <author>
      <name>Jane Doe</name>
    </author>
    <link href="http://arxiv.org/abs/2301.00001v2" rel="alternate" type="text/html"/>
    <arxiv:primary_category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

DUPLICATE_PDF_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <entry>
    <id>http://arxiv.org/abs/2402.00002v1</id>
    <updated>2024-02-01T00:00:00Z</updated>
    <published>2024-02-01T00:00:00Z</published>
    <title>Two PDFs</title>
    <summary>An entry with two pdf links.</summary>
    <author><name>John Doe</name></author>
    <link title="pdf" href="http://arxiv.org/pdf/2402.00002v1" rel="related" type="application/pdf"/>
    <link title="pdf" href="http://mirror.example.org/pdf/2402.00002v1" rel="related"/>
    <arxiv:primary_category term="math.CO" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

EMPTY_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">
  <title type="html">ArXiv Query: search_query=ti:nothing</title>
  <opensearch:totalResults>0</opensearch:totalResults>
  <opensearch:startIndex>0</opensearch:startIndex>
  <opensearch:itemsPerPage>10</opensearch:itemsPerPage>
</feed>
"""

ERROR_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/api/errors#incorrect_id_format_for_1234</id>
    <title>Error</title>
    <summary>incorrect id format for 1234</summary>
    <updated>2024-03-01T00:00:00-05:00</updated>
    <link href="http://arxiv.org/api/errors#incorrect_id_format_for_1234" rel="alternate" type="text/html"/>
    <author><name>arXiv api core</name></author>
  </entry>
</feed>
"""


@pytest.fixture
def sample_feed() -> str:
    return SAMPLE_FEED


@pytest.fixture
def duplicate_pdf_feed() -> str:
    return DUPLICATE_PDF_FEED


@pytest.fixture
def empty_feed() -> str:
    return EMPTY_FEED


@pytest.fixture
def error_feed() -> str:
    return ERROR_FEED
