from dotenv import load_dotenv
load_dotenv()
import argparse
import logging

from artifact_updater.agents.analysis.diagnostics import diagnose_html_update, log_diagnostics
from artifact_updater.agents.update.service import run_update
from artifact_updater.core.config import settings
from artifact_updater.core.models import Document

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def main():
    parser = argparse.ArgumentParser(description="Update an HTML document from a natural-language request")
    parser.add_argument("html_file", help="HTML document to update")
    parser.add_argument("description", help='Edit request, e.g. \'change the title to "New Title"\'')
    parser.add_argument("--config", default=settings.update_config,
                        help="Update preset: default, performance, reliability, advanced, debug")
    parser.add_argument("--output", help="Where to write the result (defaults to the input file)")
    parser.add_argument("--diagnose", action="store_true", help="Only print diagnostics")
    args = parser.parse_args()

    with open(args.html_file, "r", encoding="utf-8") as f:
        content = f.read()

    if args.diagnose:
        log_diagnostics(diagnose_html_update(content, args.description), args.description)
        return

    document = Document(content=content, title=args.html_file, kind="html")
    updated_html = run_update(document, args.description, args.config)

    with open(args.output or args.html_file, "w", encoding="utf-8") as f:
        f.write(updated_html)

    print("\n✅ Updated HTML (first 300 characters):\n")
    print(updated_html[:300])


if __name__ == "__main__":
    main()
