"""
どこで: `common` パッケージ。
何を: 環境変数の読み取り、実行時設定、ロギング初期化といった層横断の軽量ユーティリティ。
なぜ: engine/api の双方から再利用する基盤を分離し、依存の向きを単純化するため。
"""
