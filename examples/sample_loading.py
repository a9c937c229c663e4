import logging
from pathlib import Path

from dotenv import load_dotenv

from namedsql.errors import InvalidWhitelistValue, MissingRequiredArgument
from namedsql.loading import LoaderSettings, load_queries, make_json_event_logger

def main():
    # NAMEDSQL_PARAM_STYLE and friends may come from a .env file
    load_dotenv()

    events_logger = logging.getLogger("namedsql.events")
    events_logger.setLevel(logging.INFO)
    events_logger.addHandler(logging.StreamHandler())

    articles = load_queries(
        Path(__file__).parent / "queries" / "articles.sql",
        settings=LoaderSettings.from_env(),
        observer=make_json_event_logger(logger=events_logger),
    )
    print(f"Loaded {len(articles)} queries: {articles.exports()}")

    compiled = articles.list_articles(42, sort="title", direction="ASC", limit=20, offset=0)
    print(compiled.sql)
    print(compiled.params)

    try:
        articles.list_articles(42, sort="title; DROP TABLE articles", direction="ASC", limit=20, offset=0)
    except InvalidWhitelistValue as e:
        print(f"Rejected: {e}")

    try:
        articles.list_articles(42, sort="title", limit=20, offset=0)
    except MissingRequiredArgument as e:
        print(f"Rejected: {e}")

if __name__ == "__main__":
    main()
