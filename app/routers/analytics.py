import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.core.config import settings
from app.models.transaction import AnalyticsRequest
from app.utils.analyzer import FinanceAnalyzer
from app.utils.categorizer import EXPENSE_CATEGORIES

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(
    anomaly_feed_limit=settings.ANOMALY_FEED_LIMIT,
    cash_flow_months=settings.CASH_FLOW_MONTHS,
)


@router.post("/predictions")
def predict_spending(payload: AnalyticsRequest, category: Optional[str] = None) -> List[Dict]:
    """
    Next-month spending forecast per expense category, largest first.
    """
    try:
        predictions = finance_analyzer.predict_next_period(payload.transactions, category)
        logger.info(f"Generated {len(predictions)} predictions from {len(payload.transactions)} transactions")
        return [item.to_dict() for item in predictions]
    except Exception as e:
        logger.error(f"Error predicting spending: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error predicting spending: {str(e)}")


@router.post("/anomalies")
def detect_anomalies(payload: AnalyticsRequest, category: Optional[str] = None) -> List[Dict]:
    """
    Unusual expenses in one category, or a short feed across all categories
    when no category is given.
    """
    try:
        if category:
            anomalies = finance_analyzer.detect_anomalies(payload.transactions, category)
        else:
            anomalies = finance_analyzer.detect_all_anomalies(payload.transactions)
        logger.info(f"Detected {len(anomalies)} anomalies")
        return [item.to_dict() for item in anomalies]
    except Exception as e:
        logger.error(f"Error detecting anomalies: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error detecting anomalies: {str(e)}")


@router.post("/patterns")
def spending_patterns(payload: AnalyticsRequest) -> List[Dict]:
    try:
        return [item.to_dict() for item in finance_analyzer.analyze_patterns(payload.transactions)]
    except Exception as e:
        logger.error(f"Error analyzing patterns: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error analyzing patterns: {str(e)}")


@router.post("/insights")
def smart_insights(payload: AnalyticsRequest) -> Dict:
    try:
        return {"insights": finance_analyzer.generate_smart_insights(payload.transactions, payload.budgets)}
    except Exception as e:
        logger.error(f"Error generating insights: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error generating insights: {str(e)}")


@router.post("/cash-flow")
def cash_flow(payload: AnalyticsRequest, months: Optional[int] = Query(None, ge=1, le=120)) -> List[Dict]:
    """Income vs. expenses for the most recent months, oldest first."""
    try:
        return [item.to_dict() for item in finance_analyzer.monthly_cash_flow(payload.transactions, months)]
    except Exception as e:
        logger.error(f"Error building cash flow: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error building cash flow: {str(e)}")


@router.post("/summary")
def analytics_summary(payload: AnalyticsRequest) -> Dict:
    """
    Everything the analytics dashboard needs in a single call.
    """
    try:
        summary = finance_analyzer.summarize(payload.transactions, payload.budgets)
        logger.info(f"Summary generated successfully: total={summary.get('total_expenses', 0)}")
        return summary
    except Exception as e:
        logger.error(f"Error summarizing transactions: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error summarizing transactions: {str(e)}")


@router.get("/categorize")
def categorize_transaction(title: str = Query(..., min_length=1), amount: Optional[float] = Query(None, ge=0)) -> Dict:
    return {"title": title, "category": finance_analyzer.categorize(title, amount)}


@router.get("/categories")
def list_categories() -> Dict:
    return {"categories": EXPENSE_CATEGORIES}
