"""
Streamlit Frontend for Finance Dashboard

The screens a user works with daily:
1. Dashboard: balance, monthly chart, where the money went
2. Transactions: searchable list with delete
3. New transaction: validated form
4. Categories: two-level tree, create and delete
5. Settings: configuration and API status

The UI only talks to the HTTP API through FinanceApiClient.
Nothing is cached between reruns except the client itself, so every
screen shows what the server currently holds.
"""

from datetime import date, datetime, time

import pandas as pd
import streamlit as st

from finance_dashboard.client import (
    ApiError,
    FinanceApiClient,
    filter_transactions,
    format_currency,
    parse_amount_input,
)
from finance_dashboard.config import get_settings, validate_all_settings


# Page configuration
st.set_page_config(
    page_title="Painel Financeiro",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


TYPE_LABELS = {"receita": "Receita", "despesa": "Despesa"}


@st.cache_resource
def get_client() -> FinanceApiClient:
    """Get or create the API client (cached)."""
    return FinanceApiClient()


def show_api_error(action: str, error: Exception) -> None:
    """Render an API failure in plain language."""
    if isinstance(error, ApiError):
        st.error(f"{action}: {error.message}")
        for issue in error.errors:
            field = issue.get("field") or ".".join(issue.get("loc", [])[1:])
            st.caption(f"• {field}: {issue.get('message') or issue.get('msg')}")
    else:
        st.error(f"{action}: não foi possível contactar o servidor ({error})")


def main():
    """Main application entry point."""
    client = get_client()

    st.sidebar.title("💰 Painel Financeiro")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navegar para:",
        ["📊 Dashboard", "📋 Transações", "➕ Nova Transação", "🗂️ Categorias", "⚙️ Configurações"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(client)
    elif page == "📋 Transações":
        render_transactions_page(client)
    elif page == "➕ Nova Transação":
        render_new_transaction_page(client)
    elif page == "🗂️ Categorias":
        render_categories_page(client)
    elif page == "⚙️ Configurações":
        render_settings_page(client)


def render_dashboard_page(client: FinanceApiClient):
    """Render the summary dashboard."""
    st.title("📊 Dashboard")

    try:
        summary = client.get_financial_summary()
        monthly = client.get_monthly_revenue_expenses(6)
        by_category = client.get_expenses_by_category()
        transactions = client.list_transactions()
    except Exception as e:
        show_api_error("Erro ao carregar o dashboard", e)
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Receitas", format_currency(summary["totalReceitas"]))
    col2.metric("Despesas", format_currency(summary["totalDespesas"]))
    col3.metric("Saldo", format_currency(summary["saldo"]))

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Receitas vs. Despesas")
        chart = pd.DataFrame(monthly).set_index("month")[["receitas", "despesas"]]
        st.bar_chart(chart)

    with right:
        st.subheader("Despesas por Categoria")
        if by_category:
            frame = pd.DataFrame(by_category)
            frame["amount"] = frame["amount"].map(format_currency)
            frame["percentage"] = frame["percentage"].map(lambda p: f"{p:.1f}%")
            st.dataframe(
                frame.rename(columns={
                    "category": "Categoria",
                    "amount": "Valor",
                    "percentage": "%",
                }),
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.info("Nenhuma despesa registrada ainda.")

    st.subheader("Transações Recentes")
    for t in transactions[:5]:
        sign = "+" if t["type"] == "receita" else "-"
        when = datetime.fromisoformat(t["date"]).strftime("%d/%m/%Y")
        st.markdown(f"**{t['description']}** · {when} · {sign}{format_currency(t['amount'])}")


def render_transactions_page(client: FinanceApiClient):
    """Render the transaction list with filters."""
    st.title("📋 Transações")

    try:
        transactions = client.list_transactions()
        categories = client.list_categories()
    except Exception as e:
        show_api_error("Erro ao carregar transações", e)
        return

    names = {c["id"]: c["name"] for c in categories}

    col1, col2, col3 = st.columns(3)
    with col1:
        search = st.text_input("Buscar", placeholder="Descrição...")
    with col2:
        category_id = st.selectbox(
            "Categoria",
            options=[None] + list(names),
            format_func=lambda x: "Todas" if x is None else names[x],
        )
    with col3:
        transaction_type = st.selectbox(
            "Tipo",
            options=[None, "receita", "despesa"],
            format_func=lambda x: "Todos" if x is None else TYPE_LABELS[x],
        )

    filtered = filter_transactions(transactions, search, category_id, transaction_type)

    if not filtered:
        st.info("Nenhuma transação encontrada.")
        return

    st.dataframe(
        pd.DataFrame([
            {
                "ID": t["id"],
                "Data": datetime.fromisoformat(t["date"]).strftime("%d/%m/%Y"),
                "Descrição": t["description"],
                "Categoria": names.get(t["categoryId"], "Indefinido"),
                "Tipo": TYPE_LABELS[t["type"]],
                "Valor": format_currency(t["amount"]),
                "Pagamento": t.get("paymentMethod") or "",
            }
            for t in filtered
        ]),
        hide_index=True,
        use_container_width=True,
    )

    st.markdown("---")
    col1, col2 = st.columns([3, 1])
    with col1:
        to_delete = st.selectbox(
            "Excluir transação",
            options=[t["id"] for t in filtered],
            format_func=lambda i: next(f"#{t['id']} {t['description']}" for t in filtered if t["id"] == i),
        )
    with col2:
        if st.button("🗑️ Excluir"):
            try:
                client.delete_transaction(to_delete)
            except Exception as e:
                show_api_error("Erro ao excluir", e)
            else:
                st.rerun()


def render_new_transaction_page(client: FinanceApiClient):
    """Render the new-transaction form."""
    st.title("➕ Nova Transação")

    transaction_type = st.radio(
        "Tipo",
        options=["despesa", "receita"],
        format_func=lambda x: TYPE_LABELS[x],
        horizontal=True,
    )

    try:
        categories = client.list_categories_by_type(transaction_type)
    except Exception as e:
        show_api_error("Erro ao carregar categorias", e)
        return

    if not categories:
        st.warning("Cadastre uma categoria deste tipo primeiro.")
        return

    with st.form("nova_transacao", clear_on_submit=True):
        description = st.text_input("Descrição")
        amount_text = st.text_input("Valor (R$)", placeholder="0,00")
        category = st.selectbox(
            "Categoria",
            options=categories,
            format_func=lambda c: c["name"],
        )
        payment_method = st.selectbox(
            "Forma de pagamento",
            options=["", "PIX", "Cartão de Crédito", "Cartão de Débito", "Transferência", "Dinheiro"],
        )
        when = st.date_input("Data", value=date.today())
        submitted = st.form_submit_button("Salvar", type="primary")

    if not submitted:
        return

    try:
        amount = parse_amount_input(amount_text)
    except ValueError:
        st.error("Informe um valor válido")
        return

    try:
        created = client.create_transaction({
            "type": transaction_type,
            "amount": amount,
            "categoryId": category["id"],
            "description": description,
            "paymentMethod": payment_method or None,
            "date": datetime.combine(when, time(12, 0)).isoformat(),
        })
        st.success(f"Transação #{created['id']} salva: {format_currency(created['amount'])}")
    except Exception as e:
        show_api_error("Erro ao salvar", e)


def render_categories_page(client: FinanceApiClient):
    """Render the category tree and its management forms."""
    st.title("🗂️ Categorias")

    try:
        categories = client.list_categories()
    except Exception as e:
        show_api_error("Erro ao carregar categorias", e)
        return

    roots = [c for c in categories if c["parentId"] is None]

    for kind in ("receita", "despesa"):
        st.subheader(TYPE_LABELS[kind] + "s")
        for root in (c for c in roots if c["type"] == kind):
            st.markdown(f"**{root['name']}**")
            for child in (c for c in categories if c["parentId"] == root["id"]):
                st.markdown(f"&nbsp;&nbsp;&nbsp;&nbsp;↳ {child['name']}")

    st.markdown("---")
    st.subheader("Nova categoria")

    with st.form("nova_categoria", clear_on_submit=True):
        name = st.text_input("Nome")
        kind = st.selectbox("Tipo", options=["despesa", "receita"], format_func=lambda x: TYPE_LABELS[x])
        parent = st.selectbox(
            "Categoria pai",
            options=[None] + roots,
            format_func=lambda c: "Nenhuma (categoria raiz)" if c is None else c["name"],
        )
        color = st.color_picker("Cor", value="#6b7280")
        submitted = st.form_submit_button("Criar")

    if submitted:
        try:
            client.create_category({
                "name": name,
                "type": kind,
                "parentId": parent["id"] if parent else None,
                "color": color,
            })
        except Exception as e:
            show_api_error("Erro ao criar categoria", e)
        else:
            st.rerun()

    st.markdown("---")
    st.subheader("Excluir categoria")

    to_delete = st.selectbox(
        "Categoria",
        options=categories,
        format_func=lambda c: c["name"],
        key="excluir_categoria",
    )
    if st.button("🗑️ Excluir categoria") and to_delete:
        try:
            client.delete_category(to_delete["id"])
        except ApiError as e:
            if e.status_code == 409:
                st.warning(f"Não é possível excluir '{to_delete['name']}': {e.message}")
            else:
                show_api_error("Erro ao excluir categoria", e)
        except Exception as e:
            show_api_error("Erro ao excluir categoria", e)
        else:
            st.rerun()


def render_settings_page(client: FinanceApiClient):
    """Render configuration status."""
    st.title("⚙️ Configurações")

    st.subheader("Configuration Status")
    results = validate_all_settings()
    for section in ("app", "client"):
        if results.get(section):
            st.success(f"✅ {section}")
        else:
            st.error(f"❌ {section}: {results.get(f'{section}_error', 'invalid')}")

    client_settings = get_settings().client
    st.markdown(f"**API:** `{client_settings.api_base_url}`")

    st.subheader("API Status")
    try:
        health = client.health()
        st.success(
            f"✅ API {health['version']}: "
            f"{health['transactions']} transações, {health['categories']} categorias"
        )
    except Exception as e:
        show_api_error("API indisponível", e)


if __name__ == "__main__":
    main()
