"""Prompt text sent to the text-generation service."""

DATABASE_SCHEMA = """
-- Brazilian E-Commerce Olist Dataset Schema

CREATE TABLE olist_customers (
    customer_id VARCHAR(255) PRIMARY KEY,
    customer_unique_id VARCHAR(255) NOT NULL,
    customer_zip_code_prefix VARCHAR(10),
    customer_city VARCHAR(255),
    customer_state VARCHAR(2)
);

CREATE TABLE olist_sellers (
    seller_id VARCHAR(255) PRIMARY KEY,
    seller_zip_code_prefix VARCHAR(10),
    seller_city VARCHAR(255),
    seller_state VARCHAR(2)
);

CREATE TABLE product_category_translation (
    product_category_name VARCHAR(255) PRIMARY KEY,
    product_category_name_english VARCHAR(255)
);

CREATE TABLE olist_products (
    product_id VARCHAR(255) PRIMARY KEY,
    product_category_name VARCHAR(255),
    product_name_lenght INTEGER,
    product_description_lenght INTEGER,
    product_photos_qty INTEGER,
    product_weight_g INTEGER,
    product_length_cm INTEGER,
    product_height_cm INTEGER,
    product_width_cm INTEGER,
    FOREIGN KEY (product_category_name) REFERENCES product_category_translation(product_category_name)
);

CREATE TABLE olist_orders (
    order_id VARCHAR(255) PRIMARY KEY,
    customer_id VARCHAR(255) NOT NULL,
    order_status VARCHAR(50),
    order_purchase_timestamp TIMESTAMP,
    order_approved_at TIMESTAMP,
    order_delivered_carrier_date TIMESTAMP,
    order_delivered_customer_date TIMESTAMP,
    order_estimated_delivery_date TIMESTAMP,
    FOREIGN KEY (customer_id) REFERENCES olist_customers(customer_id)
);

CREATE TABLE olist_order_items (
    order_id VARCHAR(255) NOT NULL,
    order_item_id INTEGER NOT NULL,
    product_id VARCHAR(255),
    seller_id VARCHAR(255),
    shipping_limit_date TIMESTAMP,
    price DECIMAL(10, 2),
    freight_value DECIMAL(10, 2),
    PRIMARY KEY (order_id, order_item_id),
    FOREIGN KEY (order_id) REFERENCES olist_orders(order_id),
    FOREIGN KEY (product_id) REFERENCES olist_products(product_id),
    FOREIGN KEY (seller_id) REFERENCES olist_sellers(seller_id)
);

CREATE TABLE olist_order_payments (
    order_id VARCHAR(255) NOT NULL,
    payment_sequential INTEGER NOT NULL,
    payment_type VARCHAR(50),
    payment_installments INTEGER,
    payment_value DECIMAL(10, 2),
    PRIMARY KEY (order_id, payment_sequential),
    FOREIGN KEY (order_id) REFERENCES olist_orders(order_id)
);

CREATE TABLE olist_order_reviews (
    review_id VARCHAR(255) PRIMARY KEY,
    order_id VARCHAR(255) NOT NULL,
    review_score INTEGER,
    review_comment_title TEXT,
    review_comment_message TEXT,
    review_creation_date TIMESTAMP,
    review_answer_timestamp TIMESTAMP,
    FOREIGN KEY (order_id) REFERENCES olist_orders(order_id)
);

CREATE TABLE olist_geolocation (
    geolocation_zip_code_prefix VARCHAR(10),
    geolocation_lat DECIMAL(10, 8),
    geolocation_lng DECIMAL(11, 8),
    geolocation_city VARCHAR(255),
    geolocation_state VARCHAR(2)
);

-- One row per order with totals, for fast analytics
CREATE MATERIALIZED VIEW order_summary AS
SELECT
    o.order_id,
    o.order_status,
    o.order_purchase_timestamp,
    o.order_delivered_customer_date,
    o.order_estimated_delivery_date,
    c.customer_state,
    c.customer_city,
    SUM(oi.price) AS total_price,
    SUM(oi.freight_value) AS total_freight,
    SUM(oi.price + oi.freight_value) AS total_value,
    SUM(op.payment_value) AS total_payment,
    MAX(op.payment_type) AS payment_type,
    AVG(rev.review_score) AS avg_review_score,
    COUNT(DISTINCT oi.product_id) AS product_count
FROM olist_orders o
LEFT JOIN olist_customers c ON o.customer_id = c.customer_id
LEFT JOIN olist_order_items oi ON o.order_id = oi.order_id
LEFT JOIN olist_order_payments op ON o.order_id = op.order_id
LEFT JOIN olist_order_reviews rev ON o.order_id = rev.order_id
GROUP BY o.order_id, o.order_status, o.order_purchase_timestamp,
         o.order_delivered_customer_date, o.order_estimated_delivery_date,
         c.customer_state, c.customer_city;
"""

SQL_INSTRUCTIONS = """IMPORTANT INSTRUCTIONS:
1. If the question is a greeting (hi, hello, etc.) or general question not about data analysis, respond conversationally
2. If the question is about analyzing data, generate a single valid PostgreSQL SELECT query (a WITH prefix is allowed)
3. Never generate INSERT, UPDATE, DELETE, DDL, or more than one statement
4. Use proper JOINs when accessing multiple tables
5. Use appropriate aggregate functions (COUNT, SUM, AVG, MAX, MIN) when needed
6. Format dates properly using DATE_TRUNC(), EXTRACT(), or TO_CHAR() functions
7. Limit results to a reasonable number (use LIMIT 100 for large result sets)
8. Suggest the best visualization type: 'table', 'bar', 'line', 'pie', 'map', or 'metric'
9. Provide a clear, helpful explanation of what the query does

Return your response in the following JSON format:
{
  "sql": "SELECT ...",
  "explanation": "This query...",
  "visualizationType": "bar"
}

If the question is not about data analysis, return:
{
  "sql": "",
  "explanation": "A helpful conversational response",
  "visualizationType": "table"
}

Only return the JSON object, no additional text."""

GREETING_REPLY = """Hello! I'm your analytics assistant for the Brazilian E-Commerce Olist dataset. I can help you explore 100k+ orders from 2016-2018. Try asking me questions like:

• "Which product category sold the most in Q4 2018?"
• "Show average delivery time by state"
• "What's the total revenue by payment method?"
• "Which sellers have the highest review scores?"

What would you like to explore?"""

GENERAL_REPLY = """I'm here to help you analyze the Brazilian E-Commerce dataset! I can generate SQL queries and create visualizations from your questions. Try asking about:

• Sales and revenue trends
• Product categories and performance
• Customer and seller analytics
• Payment methods and delivery times
• Geographic distribution of orders

What specific analysis would you like to see?"""

DEFAULT_CONVERSATIONAL_REPLY = (
    "I can help you analyze the Brazilian E-Commerce dataset. What would you like to explore?"
)

ASSISTANT_PERSONA = """You are a helpful AI assistant for a Brazilian E-Commerce analytics tool.
The tool analyzes the Olist dataset which contains 100k+ orders from 2016-2018.

Your role:
- Answer questions about the dataset and how to use the analytics tool
- Provide helpful explanations about e-commerce analytics
- Guide users on what questions they can ask
- Be friendly, concise, and helpful

When users ask greetings (hi, hello, etc.), respond warmly and explain what you can help with.
When users ask about the dataset, provide informative answers.
When users ask how to use the tool, explain the analytics features."""


def build_sql_prompt(question: str, history_text: str = "") -> str:
    """Prompt asking the model for a JSON answer with SQL for ``question``."""
    sections = [
        "You are a SQL expert assistant for a PostgreSQL database containing Brazilian e-commerce data.",
        f"Database Schema:\n{DATABASE_SCHEMA}",
    ]
    if history_text:
        sections.append(f"Recent conversation:\n{history_text}")
    sections.append(f'User Question: "{question}"')
    sections.append(SQL_INSTRUCTIONS)
    return "\n\n".join(sections)


def build_chat_prompt(question: str, context: str = "") -> str:
    """Prompt for a conversational answer, with optional grounding context."""
    if context:
        return (
            f"{ASSISTANT_PERSONA}\n\nContext: {context}\n\nUser Question: {question}"
            "\n\nPlease provide a helpful, conversational response."
        )
    return (
        f"{ASSISTANT_PERSONA}\n\nUser Question: {question}"
        "\n\nPlease provide a helpful, conversational response."
    )
