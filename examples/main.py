from namedsql.grammar.parser import parse_one

def main():
    """
    Example usage of the statement model.
    """
    query = parse_one(
        "-- name: get-user\n"
        "SELECT * FROM :table{users,admins} WHERE id = :id\n"
    )
    print(query)
    print(query.args)

if __name__ == "__main__":
    main()
