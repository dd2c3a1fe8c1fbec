"""React formatter — a page component that renders the documentation model."""

from api_scanner.parser.base import Documentation

TEMPLATE = """import React from 'react';
import {{ ApiDocumentation }} from 'api-scanner/client';

const apiData = {data};

const ApiDocsPage = () => {{
  return (
    <div className="min-h-screen bg-background">
      <ApiDocumentation
        data={{apiData}}
        searchable={{true}}
        showStats={{true}}
        defaultExpanded={{false}}
        theme="system"
      />
    </div>
  );
}};

export default ApiDocsPage;
"""


def format_react(doc: Documentation) -> str:
    return TEMPLATE.format(data=doc.to_json())
