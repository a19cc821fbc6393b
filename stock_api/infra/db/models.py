from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text, func

from stock_api.infra.db.database import Base


class StockPredictionRow(Base):
    """One cached prediction per symbol and calendar day."""
    __tablename__ = 'stock_predictions'

    symbol = Column(String(12), primary_key=True)
    prediction_date = Column(String(10), primary_key=True)
    current_price = Column(Float, nullable=False)
    predicted_price = Column(Float, nullable=False)
    confidence = Column(Integer, nullable=False)
    method = Column(String(16), nullable=False, default='heuristic')
    reasoning = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index('idx_stock_predictions_date', 'prediction_date'),
    )
