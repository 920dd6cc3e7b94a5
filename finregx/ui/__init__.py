"""
ブラウザUIパッケージ（Streamlit）。
"""
