TEXT_TO_SQL_SYSTEM_PROMPT = (
    "You translate natural language requests into SQL for a SQLite database. "
    "Return only SQL code. Prefer SELECT statements unless user explicitly asks otherwise. "
    "Use provided schema hints."
)

LLM_EXPLANATION = (
    "Generated by GPT-4.1 via the backend proxy.",
    "Review the SQL before running it against your database.",
)

EXAMPLE_PROMPTS = (
    "Show me the top 10 customers by total spending in 2024 including their email and total amount spent.",
    "Insert a new order for customer 42 with pending status and amount 199.99.",
    "Update employee salaries in the marketing department by 5 percent.",
    "Delete cancelled orders older than 90 days.",
    "Create a table for product reviews with rating and comment columns.",
    "Alter the products table to add a column for last_restocked date.",
    "Drop the sessions table if it exists.",
    "Create a view that shows customers with their total orders.",
    "List customers with their latest order date using a join.",
    "Find customers whose total_spent is higher than the average using a nested query.",
    "Write a PL/SQL block that logs high-value orders over 1000.",
)
