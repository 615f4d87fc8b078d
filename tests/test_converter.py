import pytest

from converter import ASSEMBLERS, convert
from intent_classifier import Intent
from models import ConversionResult
from prompts import EXAMPLE_PROMPTS


class TestSelect:
    def test_top_customers_with_limit(self):
        result = convert(
            "Show me the top 10 customers by total spending in 2024 including their email and total amount spent."
        )
        assert result.sql == (
            "SELECT\n"
            "    full_name,\n"
            "    email,\n"
            "    SUM(total_spent) AS metric_1\n"
            "FROM\n"
            "    customers\n"
            "WHERE\n"
            "    YEAR(created_at) = 2024\n"
            "ORDER BY\n"
            "    SUM(total_spent) AS metric_1 DESC\n"
            "LIMIT 10;"
        )
        assert result.explanation == (
            "Detected intent: SELECT statement.",
            "Primary target table: customers",
            "Applied aggregations: SUM",
            "Added filters based on temporal or keyword hints.",
            "Limited results to top 10.",
        )

    def test_join_with_recency_ordering(self):
        result = convert("List customers with their latest order date using a join.")
        assert result.sql == (
            "SELECT\n"
            "    customer_id,\n"
            "    full_name,\n"
            "    email,\n"
            "    created_at\n"
            "FROM\n"
            "    customers\n"
            "JOIN orders ON customers.order_id = orders.order_id\n"
            "ORDER BY\n"
            "    created_at DESC\n"
            ";"
        )
        assert "Added sample JOIN between related tables." in result.explanation

    def test_aggregation_with_inferred_grouping(self):
        result = convert("average session duration by country")
        assert result.sql == (
            "SELECT\n"
            "    country,\n"
            "    duration_seconds,\n"
            "    COUNT(*)(session_id) AS metric_1,\n"
            "    AVG(session_id) AS metric_2\n"
            "FROM\n"
            "    sessions\n"
            "GROUP BY\n"
            "    country\n"
            "ORDER BY\n"
            "    duration_seconds DESC\n"
            ";"
        )
        assert result.explanation == (
            "Detected intent: SELECT statement.",
            "Primary target table: sessions",
            "Applied aggregations: COUNT(*), AVG",
            "Grouped results by country.",
        )

    def test_fallback_table(self):
        result = convert("xyz nonsense query")
        assert result.sql == "SELECT\n    order_id,\n    customer_id,\n    order_date,\n    status\nFROM\n    orders\n;"
        assert result.explanation == ("Detected intent: SELECT statement.", "Primary target table: orders")


class TestDml:
    def test_delete_with_conjunctive_filters(self):
        result = convert("Delete cancelled orders older than 90 days.")
        assert result.sql == (
            "DELETE FROM orders\n"
            "WHERE\n"
            "    status = 'cancelled'\n"
            "    AND order_date < CURRENT_DATE - INTERVAL '90 days';"
        )
        assert result.explanation == (
            "Detected intent: DELETE statement.",
            "Primary target table: orders",
            "Included example WHERE clause to scope the change.",
        )

    def test_delete_defaults_to_primary_key_filter(self):
        assert convert("remove a review").sql == "DELETE FROM reviews\nWHERE\n    review_id = ?;"

    def test_update_marketing_department(self):
        result = convert("Update employee salaries in the marketing department by 5 percent.")
        assert result.sql == (
            "UPDATE employees\n"
            "SET\n"
            "    first_name = 'new_first_name',\n"
            "    last_name = 'new_last_name',\n"
            "    department = 'new_department'\n"
            "WHERE\n"
            "    department = 'Marketing';"
        )

    def test_update_without_marketing_department_phrase(self):
        result = convert("Update employee salaries in marketing by 5 percent.")
        assert "department = 'Marketing'" not in result.sql
        assert result.sql.endswith("WHERE\n    employee_id = ?;")

    def test_insert_uses_only_writable_columns(self):
        result = convert("Insert a new order for customer 42 with pending status and amount 199.99.")
        assert result.sql == (
            "INSERT INTO customers (\n"
            "    full_name,\n"
            "    email,\n"
            "    created_at,\n"
            "    total_spent\n"
            ")\n"
            "VALUES (\n"
            "    'Sample full name',\n"
            "    'sample2@example.com',\n"
            "    'value_3',\n"
            "    400\n"
            ");"
        )
        column_list = result.sql.split(")")[0]
        assert "customer_id" not in column_list
        assert "order_id" not in column_list
        assert result.explanation[-1] == "Populated illustrative column values. Replace with real data before running."

    def test_insert_into_orders(self):
        result = convert("insert a row into orders")
        assert result.sql.startswith("INSERT INTO orders (\n    order_date,\n    status,\n    total_amount\n)")
        assert "CURRENT_DATE,\n    'pending',\n    300" in result.sql


class TestDdl:
    def test_drop_table_is_always_guarded(self):
        assert convert("drop table sessions").sql == "DROP TABLE IF EXISTS sessions;"
        assert convert("please drop table now").sql == "DROP TABLE IF EXISTS orders;"

    def test_create_table(self):
        result = convert("define table for reviews")
        assert result.sql == (
            "CREATE TABLE reviews (\n"
            "    review_id BIGINT PRIMARY KEY,\n"
            "    product_id VARCHAR(120),\n"
            "    rating INT CHECK (rating BETWEEN 1 AND 5),\n"
            "    comment TEXT,\n"
            "    created_at VARCHAR(120)\n"
            ");"
        )
        assert result.explanation[0] == "Detected intent: CREATE-TABLE statement."

    def test_alter_table(self):
        assert convert("alter table products add column supplier").sql == (
            "ALTER TABLE products\n    ADD COLUMN supplier VARCHAR(120);"
        )
        assert convert("alter table products drop column category and rename column status to state").sql == (
            "ALTER TABLE products\n    DROP COLUMN category,\n    RENAME COLUMN status TO state;"
        )

    def test_create_view_wraps_select_without_limit(self):
        result = convert("create view of customers and their orders")
        assert result.sql == (
            "CREATE OR REPLACE VIEW vw_customers_orders AS\n"
            "SELECT\n"
            "    customer_id,\n"
            "    full_name,\n"
            "    email,\n"
            "    created_at\n"
            "FROM\n"
            "    customers\n"
            "JOIN orders ON customers.order_id = orders.order_id\n"
            ";\n"
            ";"
        )
        assert result.explanation == (
            "Detected intent: CREATE-VIEW statement.",
            "Primary target table: customers",
            "Added sample JOIN between related tables.",
            "Wrapped a SELECT statement inside CREATE VIEW.",
        )

    def test_create_view_ignores_limit(self):
        assert "LIMIT" not in convert("create view of the top 5 customers").sql


class TestProcedural:
    def test_nested_select(self):
        result = convert("Find customers whose total_spent is higher than the average using a nested query.")
        assert result.sql == (
            "SELECT\n"
            "    customer_id,\n"
            "    full_name,\n"
            "    email,\n"
            "    created_at\n"
            "FROM\n"
            "    customers\n"
            "WHERE\n"
            "    total_spent > (\n"
            "        SELECT\n"
            "            AVG(total_spent)\n"
            "        FROM\n"
            "            customers\n"
            "    );"
        )
        assert result.explanation[-1] == "Added correlated subquery comparing against an aggregate of the same table."

    def test_nested_select_max(self):
        assert "MAX(total_amount)" in convert("orders above the max using a subquery").sql

    def test_plsql_block(self):
        result = convert("Write a PL/SQL block that logs high-value orders over 1000.")
        assert result.sql == (
            "DECLARE\n"
            "    v_count NUMBER;\n"
            "BEGIN\n"
            "    SELECT\n"
            "        COUNT(*)\n"
            "    INTO\n"
            "        v_count\n"
            "    FROM\n"
            "        orders\n"
            "    WHERE\n"
            "        total_amount > 1000;\n"
            "\n"
            "    DBMS_OUTPUT.PUT_LINE('Found ' || v_count || ' records exceeding threshold.');\n"
            "END;\n"
            "/"
        )

    def test_plsql_default_threshold(self):
        assert "salary > 100;" in convert("procedure flagging staff pay").sql


class TestProperties:
    def test_every_intent_has_an_assembler(self):
        assert set(ASSEMBLERS) == set(Intent)

    @pytest.mark.parametrize("prompt", list(EXAMPLE_PROMPTS))
    def test_deterministic(self, prompt):
        first = convert(prompt)
        second = convert(prompt)
        assert first == second
        assert isinstance(first, ConversionResult)

    @pytest.mark.parametrize(
        "prompt",
        ["", "   ", "!!!", "group by 1", "top", "limit", "ünïcødé ørders", "add column", "rename column x to", "\n\t"],
    )
    def test_total_for_odd_input(self, prompt):
        result = convert(prompt)
        assert result.sql
        assert len(result.explanation) >= 2

    def test_to_dict(self):
        payload = convert("drop table sessions").to_dict()
        assert payload == {
            "sql": "DROP TABLE IF EXISTS sessions;",
            "explanation": [
                "Detected intent: DROP-TABLE statement.",
                "Primary target table: sessions",
                "Uses IF EXISTS for safe deletion in demos.",
            ],
        }
