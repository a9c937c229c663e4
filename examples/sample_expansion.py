from namedsql.compiler import render_source
from namedsql.expansion import build_dispatch_tree, build_query_tree
from namedsql.grammar.parser import parse_one

def main():
    query = parse_one(
        "-- name: report\n"
        "SELECT :&metric{revenue,orders} FROM sales\n"
        "GROUP BY :&period{day,week,month}\n"
    )

    print("Every statement this query can produce:")
    build_query_tree(query, lambda expansion: print("  " + render_source(expansion.statement)))

    tree = build_dispatch_tree(query)
    print(f"Dispatch starts on '{tree.variable}' with choices {tree.whitelist}")

if __name__ == "__main__":
    main()
